# File: policy_scout/report/__init__.py
"""policy_scout.report: сохранение результатов анализа (JSON), используется CLI."""

from policy_scout.report.json_report import render_json

__all__ = ["render_json"]
