from .welford import WelfordAccumulator

__all__ = ["WelfordAccumulator"]
