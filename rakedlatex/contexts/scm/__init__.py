"""
SCM Context

Responsibilities:
- Detects which source-control client is available on PATH
- Extracts revision and date of the latest change for the title page

Owns: Source-control client invocation and output parsing
Never: Modifies the repository it inspects
"""

from rakedlatex.contexts.scm.exceptions import ScmParseError
from rakedlatex.contexts.scm.scm_stats import (
    SCM_CLIENTS,
    Mercurial,
    ScmClient,
    ScmRecord,
    Subversion,
    collect_scm_stats,
    detect_scm_client,
)

__all__ = [
    "SCM_CLIENTS",
    "Mercurial",
    "ScmClient",
    "ScmParseError",
    "ScmRecord",
    "Subversion",
    "collect_scm_stats",
    "detect_scm_client",
]
