"""
Profile Context

Responsibilities:
- Defines the ProfileRecord structure and the partial ExtractedFragment
- Merges fragments into records without overwriting curated data
- Loads, backs up and atomically writes the stored profile
- Folds aggregated repository statistics into the record

Owns: Profile structure, merge policy, persistence
Never: Parses raw document text
"""
