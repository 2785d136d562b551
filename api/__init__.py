"""FastAPI layer for the Dify face analysis relay."""
