"""Command lookup for the visualine CLI.

A command is a public module under visualine.commands that defines a
`command` object of type Command. The module docstring is the command's
documentation: its first line is the one-line summary shown in `--help`
and `visualine help`, the whole docstring is what `visualine help <name>`
prints.

Two modules declaring the same command name is a packaging error and is
raised on discovery rather than letting one silently shadow the other.
"""

import importlib
import pkgutil
from types import ModuleType

import visualine.commands as _package
from visualine.core.types import Command

# pkgutil lists nothing inside a frozen binary; these are imported instead
_FROZEN_MODULES = ('match', 'palette', 'scan', 'swatches')

_modules: dict[str, ModuleType] = {}


def _module_names() -> list[str]:
    names = [name for _finder, name, _ispkg in pkgutil.iter_modules(_package.__path__) if not name.startswith('_')]
    return sorted(names) or list(_FROZEN_MODULES)


def _load() -> dict[str, ModuleType]:
    if _modules:
        return _modules
    for modname in _module_names():
        module = importlib.import_module(f'{_package.__name__}.{modname}')
        cmd = getattr(module, 'command', None)
        if not isinstance(cmd, Command):
            continue
        if cmd.name in _modules:
            raise RuntimeError(
                f'Command {cmd.name!r} is defined by both {_modules[cmd.name].__name__} and {module.__name__}'
            )
        _modules[cmd.name] = module
    return _modules


def discover() -> dict[str, Command]:
    """Name -> Command for every command module, sorted by name."""
    return {name: module.command for name, module in sorted(_load().items())}


def get(name: str) -> Command:
    modules = _load()
    if name not in modules:
        raise KeyError(f'Unknown command: {name}. Available: {", ".join(sorted(modules))}')
    return modules[name].command


def docs(name: str) -> str:
    """Full documentation of a command: its module docstring."""
    module = _load()[name]
    return (module.__doc__ or '').strip()


def summary(name: str) -> str:
    """One-line description: first docstring line, else the command's help."""
    text = docs(name)
    return text.splitlines()[0] if text else get(name).help
