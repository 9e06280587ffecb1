"""
Ingestion — PDF extraction, chunking, and embedding into the document store.

This module is responsible for the upload pipeline that converts an admin's
PDF into embedded chunks stored in the vector database.
"""
