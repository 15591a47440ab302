"""Auto-discovery of command modules.

Every .py file in this package that defines a `command` object is
auto-registered by visualine.registry.discover().

The explicit imports below ensure frozen binaries include these modules.
Without them, pkgutil.iter_modules cannot find the command files at runtime.
"""

# Hidden imports for frozen builds; keep in sync with registry._FROZEN_MODULES
import visualine.commands.match as _match  # noqa: F401
import visualine.commands.palette as _palette  # noqa: F401
import visualine.commands.scan as _scan  # noqa: F401
import visualine.commands.swatches as _swatches  # noqa: F401
