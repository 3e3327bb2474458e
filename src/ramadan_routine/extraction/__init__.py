"""Recognition-service extraction of schedule rows.

Submodules:
  errors        -- EmptyResponse / MalformedResponse / ServiceFailure taxonomy
  decoder       -- fence stripping and JSON-array decoding of replies
  prompts       -- system prompts carrying the Ramadan rewrite rules
  resources     -- RecognitionClient protocol and the OpenAI-backed client
  orchestrator  -- ModelPolicy and the extract() entry point
  loaders       -- PDF / image input acquisition
"""
