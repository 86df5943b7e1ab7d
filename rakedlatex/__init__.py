"""
rakedlatex - task runner for templated LaTeX documents

Generates a base LaTeX document from a configuration, collects source-control
stats for its title page, and drives latex/bibtex to build it.

Architecture:
- Templating Context: Document configuration and base document generation
- SCM Context: Revision stats from Mercurial or Subversion
- Rendering Context: Running latex/bibtex and building binary output
"""

__version__ = "0.1.0"
