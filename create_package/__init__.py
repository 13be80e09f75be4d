"""
create_package

Scaffolds npm packages: fills in `package.json`, copies boilerplate, writes a README and
sets up git plus the GitHub repository.

Key responsibilities are split across modules:
- `descriptor.py`: typed `package.json` model and JSON I/O
- `merger.py`: merge an existing descriptor with template defaults
- `naming.py` / `hosted_git.py`: package names, repository slugs, repository URL parsing
- `renderer.py`: boilerplate copying and README placeholder filling
- `vcs.py` / `github_client.py`: git, npm and travis commands; GitHub REST API
- `config.py` / `log.py`: YAML configuration and console logging
- `initializer.py` / `cli.py`: the end-to-end flow and its CLI entrypoint
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
