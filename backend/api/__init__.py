"""
HTTP API Layer

FastAPI application exposing generation, rendering and classification.
"""
