"""
Web application package for the chess engine.

Provides a FastAPI JSON API for playing against the engine over HTTP:
position status, validated player moves, and engine moves.
Run with `python -m web.app` or `uvicorn web.app:app`.
"""
