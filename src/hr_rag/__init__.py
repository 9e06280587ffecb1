"""Korean HR / labor-law RAG chatbot."""

__version__ = "0.1.0"
