"""
HealScan AI - Wound Assessment Assistant

Upload a photo of a wound with the patient's age and receive an
AI-generated assessment: wound type, healing stage, severity,
precautions, and care suggestions.

IMPORTANT: This is NOT a diagnosis tool. It must NEVER replace a doctor.
"""

__version__ = "1.0.0"
__author__ = "HealScan AI Team"
