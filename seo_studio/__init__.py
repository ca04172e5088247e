"""
Banking SEO Studio

An SEO content-generation service that:
1. Accepts a URL, pasted HTML or an uploaded document for a brand profile
2. Sends it to Gemini or OpenAI with the banking schema instruction
3. Normalizes SEO variants, JSON-LD graph and impact scores into a Generation
4. Lets a conversational assistant refine variants and schema
"""

__version__ = "0.2.0"
