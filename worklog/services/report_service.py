"""
Report Generation Service using Jinja2 templates.

Architecture Decision: Template Pattern
Allows users to customize reports without changing code.
"""

import datetime
from pathlib import Path
from typing import List, Optional
from jinja2 import Environment, FileSystemLoader

from worklog.domain.models import MonthlySummary
from worklog.i18n import tr
from worklog.utils import get_resource_path

DEFAULT_TEMPLATE = "monthly_summary.txt"


class ReportService:
    """
    Renders monthly summaries from aggregated log data.
    """

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize the report service.

        Args:
            template_dir: Directory containing Jinja2 templates
        """
        if template_dir is None:
            template_dir = get_resource_path("worklog/resources/templates")

        self.template_dir = Path(template_dir)

        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            trim_blocks=True,
            lstrip_blocks=True
        )

        self.env.filters['format_hours'] = self._format_hours
        self.env.filters['format_percent'] = self._format_percent
        self.env.filters['format_month'] = self._format_month
        self.env.filters['bar'] = self._bar

    @staticmethod
    def _format_hours(hours: float) -> str:
        """Format hours with two decimals"""
        return f"{hours:.2f}"

    @staticmethod
    def _format_percent(fraction: float) -> str:
        return f"{fraction * 100:.0f}%"

    @staticmethod
    def _format_month(month: datetime.date) -> str:
        return month.strftime("%Y-%m")

    @staticmethod
    def _bar(hours: float, scale: float = 2.0) -> str:
        """Text bar, one block per `1/scale` hours"""
        return "#" * int(round(hours * scale))

    def render_monthly_summary(self, summary: MonthlySummary, account_name: str,
                               template_name: str = DEFAULT_TEMPLATE,
                               output_file: Optional[Path] = None) -> str:
        """
        Render a monthly summary.

        Args:
            summary: Aggregated month from LogRepository.monthly_aggregate
            account_name: Account shown in the header
            template_name: Template file inside the template directory
            output_file: Optional file path to save the report

        Returns:
            The rendered report
        """
        labels = {
            name: tr(f"report.{name}")
            for name in ("title", "account", "total", "target", "progress",
                         "active_days", "office_days", "trend", "hours_unit")
        }
        template = self.env.get_template(template_name)
        content = template.render(summary=summary, account_name=account_name, labels=labels)

        if output_file:
            output_file.parent.mkdir(parents=True, exist_ok=True)
            with open(output_file, 'w', encoding='utf-8') as f:
                f.write(content)

        return content

    def list_templates(self) -> List[str]:
        """List all available template files"""
        return sorted(f.name for f in self.template_dir.glob("*.txt"))
