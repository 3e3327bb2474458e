"""Time-slot adjustment and schedule normalization.

Submodules:
  patterns   -- compiled regex patterns and column-label synonyms
  time_maps  -- Ramadan slot tables, canonicalization, cell adjustment
  columns    -- time-column detection and table-wide adjustment
  schema     -- ScheduleTable Pydantic model and row normalizer
"""
