"""FastAPI upload/download service for the converter."""
