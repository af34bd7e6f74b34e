"""
Self-Check Report Generator
============================

Writes self-check results as JSON (machine-readable, the full
:class:`~shared.models.ScanResult` including the scorer payload) or as a
single self-contained HTML page with inline CSS.

A simulated result carries a visible notice in both formats.
"""

from __future__ import annotations

import html
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from shared.models import ScanResult

from selfcheck import __version__


_HTML_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>CyberSecure Self-Check - {title}</title>
    <style>
        :root {{
            --bg-primary: #0d1117;
            --bg-secondary: #161b22;
            --bg-tertiary: #21262d;
            --text-primary: #c9d1d9;
            --text-secondary: #8b949e;
            --accent-cyan: #58a6ff;
            --accent-green: #3fb950;
            --accent-yellow: #d29922;
            --accent-red: #f85149;
            --border: #30363d;
        }}
        * {{ margin: 0; padding: 0; box-sizing: border-box; }}
        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Helvetica, Arial, sans-serif;
            background: var(--bg-primary);
            color: var(--text-primary);
            line-height: 1.6;
            padding: 2rem;
        }}
        .container {{ max-width: 960px; margin: 0 auto; }}
        .header, .section {{
            background: var(--bg-secondary);
            border: 1px solid var(--border);
            border-radius: 8px;
            padding: 1.5rem;
            margin-bottom: 1.5rem;
        }}
        .header {{ text-align: center; border-color: var(--accent-cyan); }}
        .header h1 {{ color: var(--accent-cyan); }}
        .subtitle, .footer {{ color: var(--text-secondary); font-size: 0.85rem; }}
        .simulated {{
            background: rgba(210, 153, 34, 0.25);
            border: 2px solid var(--accent-yellow);
            color: var(--accent-yellow);
            font-weight: 700;
            padding: 1rem;
            border-radius: 8px;
            margin-bottom: 1.5rem;
        }}
        table {{ width: 100%; border-collapse: collapse; margin: 1rem 0; }}
        th, td {{ padding: 0.6rem 1rem; text-align: left; border: 1px solid var(--border); }}
        th {{ background: var(--bg-tertiary); color: var(--accent-cyan); }}
        .meter {{ height: 20px; background: var(--bg-tertiary); border-radius: 10px; overflow: hidden; }}
        .meter-fill {{ height: 100%; background: var(--accent-cyan); }}
        .finding {{
            padding: 0.75rem 1rem;
            margin: 0.5rem 0;
            border-left: 4px solid var(--border);
            background: var(--bg-tertiary);
        }}
        .severity-critical, .severity-high {{ border-left-color: var(--accent-red); }}
        .severity-medium {{ border-left-color: var(--accent-yellow); }}
        .severity-low {{ border-left-color: var(--accent-cyan); }}
        .severity-info {{ border-left-color: var(--accent-green); }}
        .footer {{ text-align: center; }}
    </style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>CyberSecure :: {tool}</h1>
            <div class="subtitle">{target}<br>Generated: {timestamp}</div>
        </div>
        {simulated_notice}
        <div class="section">
            <h2>Summary</h2>
            <p>{summary}</p>
            <table>
                <tr><th>Level</th><td>{level}</td><th>Score</th><td>{score}</td></tr>
                <tr><th>Duration</th><td>{duration:.3f}s</td><th>Findings</th><td>{finding_count}</td></tr>
            </table>
            {meter}
        </div>
        <div class="section">
            <h2>Findings</h2>
            {findings_html}
        </div>
        <div class="footer">CyberSecure Self-Check v{version}</div>
    </div>
</body>
</html>
"""


class SelfCheckReportGenerator:
    """HTML and JSON report writer.

    Usage::

        generator = SelfCheckReportGenerator()
        generator.generate_json(result, Path("output/url.json"))
    """

    def generate_html(
        self,
        result: ScanResult,
        output_path: Path,
        title: Optional[str] = None,
    ) -> Path:
        """Write *result* as a standalone HTML page and return its path."""
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
        content = self.render_html(result, title=title, timestamp=timestamp)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
        return output_path

    def render_html(
        self,
        result: ScanResult,
        *,
        title: Optional[str] = None,
        timestamp: str = "",
    ) -> str:
        return _HTML_TEMPLATE.format(
            title=html.escape(title or f"{result.tool_name} check of {result.target}"),
            tool=html.escape(result.tool_name.title()),
            target=html.escape(result.target),
            timestamp=timestamp,
            simulated_notice=self._simulated_notice(result),
            summary=html.escape(result.summary),
            level=html.escape(result.level or "-"),
            score="-" if result.score is None else f"{result.score}/100",
            duration=result.duration_seconds or 0.0,
            finding_count=result.finding_count,
            meter=self._meter_html(result.score),
            findings_html=self._findings_html(result),
            version=__version__,
        )

    def generate_json(self, result: ScanResult, output_path: Path) -> Path:
        """Write *result* as indented JSON and return its path."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render_json(result), encoding="utf-8")
        return output_path

    def render_json(self, result: ScanResult) -> str:
        report: dict[str, Any] = {
            "report_metadata": {
                "generated_at": datetime.now(timezone.utc).isoformat(),
                "version": __version__,
            },
            "duration_seconds": result.duration_seconds,
            "severity_counts": result.severity_counts,
        "highest_severity": (
            result.highest_severity.value if result.highest_severity else None
        ),
            **result.model_dump(mode="json"),
        }
        return json.dumps(report, indent=2, ensure_ascii=False)

    # ------------------------------------------------------------------ #
    #  Private HTML builders
    # ------------------------------------------------------------------ #

    @staticmethod
    def _simulated_notice(result: ScanResult) -> str:
        if not result.simulated:
            return ""
        fields = result.metadata.get("simulated_fields") or []
        detail = f" Simulated fields: {html.escape(', '.join(fields))}." if fields else ""
        return (
            '<div class="simulated">SIMULATED RESULT: the live service could not be '
            f"used, so this answer was generated locally.{detail}</div>"
        )

    @staticmethod
    def _meter_html(score: Optional[int]) -> str:
        if score is None:
            return ""
        return f'<div class="meter"><div class="meter-fill" style="width: {score}%"></div></div>'

    @staticmethod
    def _findings_html(result: ScanResult) -> str:
        if not result.findings:
            return '<p class="subtitle">No findings.</p>'

        parts: list[str] = []
        for finding in result.findings:
            parts.append(
                f'<div class="finding {finding.severity.css_class}">'
                f"<h3>{finding.severity.value} {html.escape(finding.title)}</h3>"
                f"<p>{html.escape(finding.description)}</p>"
            )
            if finding.recommendation:
                parts.append(
                    f"<p><strong>Recommendation:</strong> "
                    f"{html.escape(finding.recommendation)}</p>"
                )
            parts.append("</div>")
        return "\n".join(parts)
