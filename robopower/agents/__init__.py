"""
Central player registry and registration decorator for Robo Power players.
Use @register_agent("name") above your Player class to make it available by name.
All player modules must be imported here to ensure registration occurs.
"""

AGENT_MAP = {}

def register_agent(name):
	"""
	Decorator to register a player class under a given name.
	Usage:
		@register_agent("random")
		class RandomPlayer(Player): ...
	"""
	def decorator(cls):
		AGENT_MAP[name] = cls
		return cls
	return decorator


def create_agent(name, player_index, engine, **kwargs):
	"""
	Instantiate a registered player class by name and seat it at player_index.
	Raises:
		ValueError: If the name is not registered.
	"""
	key = name.lower()
	if key not in AGENT_MAP:
		raise ValueError(f"Unknown agent: {name}")
	return AGENT_MAP[key](player_index, engine, **kwargs)

# Automatically import all agent modules in this directory to ensure registration decorators run
import importlib
import os
import pkgutil

_this_dir = os.path.dirname(__file__)
_pkg_name = __name__
for _, modname, ispkg in pkgutil.iter_modules([_this_dir]):
	if not ispkg and modname not in ("__init__", "base"):
		importlib.import_module(f"{_pkg_name}.{modname}")
