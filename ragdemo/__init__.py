"""
ragdemo - console demo of a retrieval-augmented generation workflow.
"""

__version__ = "1.0.0"
