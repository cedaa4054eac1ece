from .model import ProgressModel, apply_session, smooth, step_strength

__all__ = ["ProgressModel", "apply_session", "smooth", "step_strength"]
