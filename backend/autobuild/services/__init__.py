"""
Services Layer

Business logic services that:
- Accept a Session plus ids or request models
- Return pydantic response models or plain counts
- Do NOT depend on HTTP request/response objects
- Only write in schedule_replayer and auto_build_orchestrator
"""
