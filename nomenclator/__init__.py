"""
Nomenclator - unique name and secret key generator

Responsibilities:
- Allocate human-readable names (local word lists or a remote name service)
- Generate a 32-byte secret key per name
- Persist each name -> key pairing to a single-file store
- Optionally export the run's pairs as JSON
"""
