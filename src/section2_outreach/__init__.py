"""
Section 2: Outreach

Takes the critical CVEs selected by Section 1 and:
1. Asks Gemini which company is most affected, and its address
2. Parses the XML reply into a validated StructuredResponse
3. Orders a random coffee to that address through the Terminal shop API
"""

__version__ = "1.0.0"
