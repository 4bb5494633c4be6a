"""
OdiaAI Translator - English/Hindi to Odia translation service.
"""

__version__ = "1.0.0"
