"""
Type environments: the canonical list-structured search.

Each frame holds one batch of bindings and a link to the frame it extends.
Extension never touches an existing frame, so sibling branches of the
type-checker's recursion (the arms of a type-case, for instance) can each
extend the same frame without seeing one another's bindings.
"""
from typing import Sequence, Iterator
import abc
from .ontology import TypeExpression
from .calculus import TExp
from .static.domain import UnboundVariable

class TypeEnv(abc.ABC):
	@abc.abstractmethod
	def lookup(self, name:str) -> TypeExpression:
		""" The type bound to the name, or else an UnboundVariable failure. """
		pass

	@abc.abstractmethod
	def frames(self) -> Iterator["InnerEnv"]:
		pass

	def extend(self, names:Sequence[str], types:Sequence[TExp]) -> "InnerEnv":
		return extend(names, types, self)

class EmptyEnv(TypeEnv):
	""" Effectively the built-in scope, but with nothing built in. """
	def lookup(self, name:str) -> TypeExpression:
		return UnboundVariable(name)
	def frames(self):
		return iter(())
	def __repr__(self): return "<EmptyEnv>"

EMPTY = EmptyEnv()

class InnerEnv(TypeEnv):
	def __init__(self, bindings:dict[str, TExp], static_link:TypeEnv):
		self._bindings = bindings
		self._static_link = static_link

	def lookup(self, name:str) -> TypeExpression:
		for frame in self.frames():
			if name in frame._bindings:
				return frame._bindings[name]
		return UnboundVariable(name)

	def frames(self):
		env = self
		while isinstance(env, InnerEnv):
			yield env
			env = env._static_link

	def names(self) -> list[str]:
		""" Names bound in this frame alone """
		return list(self._bindings)

	def __repr__(self):
		return "<InnerEnv %s>" % ", ".join("%s:%r" % pair for pair in self._bindings.items())

def empty() -> TypeEnv:
	return EMPTY

def extend(names:Sequence[str], types:Sequence[TExp], parent:TypeEnv) -> InnerEnv:
	names, types = list(names), list(types)
	if len(names) != len(types):
		raise ValueError("Cannot bind %d names to %d types." % (len(names), len(types)))
	bindings = {}
	for name, texp in zip(names, types):
		# Within one frame, the earliest binding of a name is the one that counts.
		bindings.setdefault(name, texp)
	return InnerEnv(bindings, parent)

def lookup(env:TypeEnv, name:str) -> TypeExpression:
	return env.lookup(name)
