"""AI gateway adapter."""

from noticeboard.infrastructure.external.ai.gateway_analyzer import AIGatewayAnalyzer

__all__ = ["AIGatewayAnalyzer"]
