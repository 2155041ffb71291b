"""
autorriculum - keeps a structured professional profile in sync with its sources

A rule-based pipeline that reads a resume exported as PDF or text, recovers
contact details, education, certifications, languages and skills, and merges
them into a curated JSON profile without clobbering existing data.

Architecture:
- Intake Context: Source document reading and heuristic field extraction
- Profile Context: Profile record structure, merging and persistence
"""

__version__ = "0.1.0"
