"""Transform validation constraints into the equivalent JSON schema."""

# Synchronize with setup.py!
__version__ = "0.1.0"
__author__ = "Constraint Schema Developers"
__license__ = "License :: OSI Approved :: MIT License"
__status__ = "Alpha"
