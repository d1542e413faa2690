"""エージェント層のエクスポート."""

from src.application.agents.evaluator import AnalysisClient, EvaluationPromptBuilder

__all__ = ["AnalysisClient", "EvaluationPromptBuilder"]
