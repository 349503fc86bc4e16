"""admiral-cli — command-line front-end for the Admiral container-host service.

Hosts and placement policies are managed through the service's REST API
with a strict layered architecture (``core`` / ``infra`` / ``cli``).
"""

from admiral_cli.version import __version__

__all__: list[str] = ["__version__"]
