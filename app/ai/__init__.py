"""
AI Module - Everything between a user's prompt and rendered output.

Architecture Overview:
=====================

   prompt + mode + tone
            │
            ▼
┌───────────────────────┐
│   prompts/            │  compile_prompt(): mode templates + tone policy
└───────────┬───────────┘
            ▼
┌───────────────────────┐
│   providers/          │  GeminiProvider: text (Gemini) + image (Imagen)
└───────────┬───────────┘
            ▼
┌───────────────────────┐
│   errors.py           │  raw backend error → FailureKind + message
└───────────┬───────────┘
            ▼
┌───────────────────────┐
│   output/             │  prose / code segments, copy indicators, downloads
└───────────────────────┘

Module Structure:
================
- schemas/: Request / result value types
- prompts/: Prompt templates
- providers/: Backend clients
- output/: Rendering helpers for generated content
- monitoring/: Logging and metrics for backend calls

The orchestration itself lives in app.services.generation_service.
"""

__version__ = "0.1.0"
