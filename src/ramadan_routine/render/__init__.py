"""PDF rendering of schedule tables.

Submodules:
  surface  -- DrawingSurface protocol, text wrapping helpers, PyMuPDF PdfSurface
  table    -- TableLayout, column sizing, and the paginating TableRenderer
"""
