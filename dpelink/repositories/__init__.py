from .diagnostics import CandidateRepository, SqlDiagnosticRepository
from .links import LinkStore, SqlLinkStore, build_link_stores

__all__ = [
    "CandidateRepository",
    "LinkStore",
    "SqlDiagnosticRepository",
    "SqlLinkStore",
    "build_link_stores",
]
