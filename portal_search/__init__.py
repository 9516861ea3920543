"""
Portal Search Package.

In-memory document index for a document portal: extracts text from the
portal's PDF collection and answers free-text queries with ranked snippets
used as grounding context by the portal chatbot.
"""

__version__ = "1.0.0"
