"""Service layer for the stats pipeline.

Layer hierarchy:
    CLI -> update_service (orchestration) -> contributions / streaks / readme

Services should:
- Keep pure computation (streaks) free of I/O
- Raise the module's own exception types and let them propagate
- Leave all file writes to update_service
"""
