"""
Intake Context

Responsibilities:
- Reads the source document (PDF or plain text) into a single text string
- Classifies lines and tracks resume sections
- Extracts contacts, education, certifications, languages and skills

Owns: Heuristic document-to-fragment extraction
Never: Reads or writes the stored profile record
"""
