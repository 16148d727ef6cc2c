"""
Catalogue helpers for browsing projects and plots.

Search is a case-insensitive substring match performed on the client
over lists already fetched from the backend.
"""

from typing import Iterable, List, Optional

from ..schemas.plot import Plot
from ..schemas.project import Project


CRORE = 10_000_000
LAKH = 100_000


def _contains(value: Optional[str], needle: str) -> bool:
    return needle in (value or "").lower()


class CatalogService:
    """Filtering and formatting for the explore and home screens."""

    @staticmethod
    def filter_plots(plots: Iterable[Plot], query: str = "") -> List[Plot]:
        """Return plots whose title or location contains ``query``."""
        needle = (query or "").lower()
        return [p for p in plots if _contains(p.title, needle) or _contains(p.location, needle)]

    @staticmethod
    def filter_projects(
        projects: Iterable[Project],
        query: str = "",
        city_filter: Optional[str] = None,
    ) -> List[Project]:
        """Search projects by name, description, city or state.

        ``city_filter`` additionally restricts the result to projects whose
        city or state contains the given text.  An empty filter keeps all
        projects matching the search.
        """
        needle = (query or "").lower()
        region = (city_filter or "").lower()
        result = []
        for project in projects:
            matches_search = any(
                _contains(value, needle)
                for value in (project.name, project.description, project.city, project.state)
            )
            matches_filter = (
                _contains(project.city, region) or _contains(project.state, region)
                if region
                else True
            )
            if matches_search and matches_filter:
                result.append(project)
        return result

    @staticmethod
    def format_price(price: float) -> str:
        """Format a rupee amount in crores (``Cr``) or lakhs (``Lac``)."""
        if price >= CRORE:
            return f"₹{price / CRORE:.2f} Cr"
        return f"₹{price / LAKH:.2f} Lac"
