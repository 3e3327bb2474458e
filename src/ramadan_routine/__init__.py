"""Ramadan routine: rewrite scanned class schedules to Ramadan timings and export them as PDF.

Subpackages:
  schedule    -- slot tables, canonicalization, time-column detection, normalization
  extraction  -- recognition-service requests and reply decoding
  render      -- paginated PDF table rendering
  web         -- FastAPI upload/download service
"""

__version__ = "0.1.0"
