from procrastination_engine.models.requests import AnalyzeRequest

__all__ = ["AnalyzeRequest"]
