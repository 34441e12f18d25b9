"""
casepriority HTTP API

FastAPI application exposing assessment, escalation, display and
jurisdiction endpoints. Run with:

    uvicorn casepriority.api.main:app
"""
