"""
ProfMatch - researcher-to-professor match results, saved and exported

Consumes ranked professor match results produced by an upstream matching
service and turns them into shareable reports.

Architecture:
- Matching Context: Match result data structures and ingest
- Exporting Context: Markdown, LaTeX and PDF report rendering and delivery
- Accounts Context: Mock authentication and user-scoped saved searches
"""

__version__ = "0.1.0"
