"""
Illustrative wound examples.

Static content for the examples view; no analysis is run for these.
"""

from typing import List

from healscan.models.schemas import ExampleCase

EXAMPLES: List[ExampleCase] = [
    ExampleCase(
        title="Burn Wound (Adult)",
        image_url="https://images.unsplash.com/photo-1522335789203-aabd1fc54bc9?auto=format&fit=crop&w=600&q=60",
        precautions=[
            "Do not apply ice directly on the burn.",
            "Keep the area clean and loosely covered.",
            "Avoid breaking blisters.",
        ],
        meds=[
            "Apply silver sulfadiazine cream.",
            "Keep hydrated and monitor pain.",
            "Consult a doctor if burn is deep.",
        ],
    ),
    ExampleCase(
        title="Cut Wound (Child)",
        image_url="https://images.unsplash.com/photo-1531736275454-53c0b03f97b3?auto=format&fit=crop&w=600&q=60",
        precautions=[
            "Wash hands before touching the wound.",
            "Avoid strong antiseptics directly.",
            "Keep the wound dry for a few hours.",
        ],
        meds=[
            "Clean with mild antiseptic.",
            "Apply antibiotic ointment.",
            "Cover with sterile bandage.",
        ],
    ),
    ExampleCase(
        title="Diabetic Foot Ulcer (Elderly)",
        image_url="https://images.unsplash.com/photo-1556157382-97eda2d62296?auto=format&fit=crop&w=600&q=60",
        precautions=[
            "Never walk barefoot.",
            "Avoid tight shoes or pressure.",
            "Monitor blood sugar closely.",
        ],
        meds=[
            "Medicated dressings as directed.",
            "Prescribed antibiotics as needed.",
            "Seek medical supervision.",
        ],
    ),
    ExampleCase(
        title="Infected Wound (Any Age)",
        image_url="https://images.unsplash.com/photo-1576765608610-cb602a3d7b86?auto=format&fit=crop&w=600&q=60",
        precautions=[
            "Do not ignore pus or swelling.",
            "Avoid reusing old dressings.",
            "Do not apply powders.",
        ],
        meds=[
            "Oral antibiotics per doctor.",
            "Saline wash.",
            "Sterile gauze dressing.",
        ],
    ),
]


def list_examples() -> List[ExampleCase]:
    return list(EXAMPLES)
