"""cargo-dub — run the DUB build tool through a stable command surface.

Works standalone (``cargo-dub build``) or as a host plugin subcommand
(``cargo dub build``).  All real work is delegated to the installed
``dub`` binary.
"""

from cargo_dub.version import __version__

__all__: list[str] = ["__version__"]
