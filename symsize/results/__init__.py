"""Result records produced by symbol analyses.

Exports the immutable template-group summaries and the DataFrame helper.
"""

from __future__ import annotations

from .template_groups import (
    SpecializationTotals,
    TemplateGroupSpecializationSummary,
    TemplateGroupSummary,
    TemplateGroupSymbolSummary,
    TemplateGroupTotals,
    template_groups_frame,
)

__all__ = [
    "SpecializationTotals",
    "TemplateGroupSpecializationSummary",
    "TemplateGroupSummary",
    "TemplateGroupSymbolSummary",
    "TemplateGroupTotals",
    "template_groups_frame",
]
