"""
Failure Judgements
===================

The type-checker never throws a type error. Every rule returns a judgement:
either an honest type from the calculus, or else one of these. Failures know
they are errors, so each rule can check `is_error()` on what it got back from
a sub-expression and pass it straight up without looking any further.

The first failure found is the one that surfaces: there is no recovery,
because a type error is unrecoverable for the expression that contains it.
"""

from typing import Sequence
from ..ontology import TypeExpression, Phrase
from ..calculus import TExp, render

class Failure(TypeExpression):
	def is_error(self): return True
	def visit(self, visitor): return visitor.on_failure(self)
	def describe(self) -> str:
		raise NotImplementedError(type(self))
	def __repr__(self) -> str:
		return "<%s: %s>" % (type(self).__name__, self.describe())
	def __eq__(self, other):
		return type(self) is type(other) and vars(self) == vars(other)
	def __hash__(self): return hash(type(self))

class UnboundVariable(Failure):
	def __init__(self, name:str):
		self.name = name
	def describe(self): return "Unbound variable: %s" % self.name

class NotFound(Failure):
	""" Introspection could not find a type or record by this name. """
	def __init__(self, name:str):
		self.name = name
	def describe(self): return "%s not found" % self.name

class UnknownPrimitive(Failure):
	def __init__(self, name:str):
		self.name = name
	def describe(self): return "Primitive not yet implemented: %s" % self.name

class IncompatibleTypes(Failure):
	def __init__(self, computed:TExp, expected:TExp, site:Phrase):
		self.computed, self.expected, self.site = computed, expected, site
	def describe(self):
		return "Incompatible types: %s and %s in %s" % (render(self.computed), render(self.expected), self.site)

class NotAProcedure(Failure):
	def __init__(self, texp:TExp, site:Phrase):
		self.texp, self.site = texp, site
	def describe(self):
		return "Application of non-procedure: %s in %s" % (render(self.texp), self.site)

class ArityMismatch(Failure):
	def __init__(self, site:Phrase, need:int, got:int):
		self.site, self.need, self.got = site, need, got
	def describe(self):
		return "Wrong number of parameters (need %d, got %d): %s" % (self.need, self.got, self.site)

class NoCommonType(Failure):
	def __init__(self, types:Sequence[TExp]):
		self.types = tuple(types)
	def describe(self):
		return "No type found to cover %s" % " ".join(map(render, self.types))

class RecordMismatch(Failure):
	def __init__(self, name:str):
		self.name = name
	def describe(self): return "Declarations of %s do not match" % self.name

class NoBaseCase(Failure):
	def __init__(self, type_name:str):
		self.type_name = type_name
	def describe(self): return "Recursive type %s has no base case" % self.type_name

class DuplicateCase(Failure):
	def __init__(self, record_name:str):
		self.record_name = record_name
	def describe(self): return "More than one clause for %s" % self.record_name

class UnknownRecord(Failure):
	def __init__(self, name:str):
		self.name = name
	def describe(self): return "No record is called %s" % self.name

class UnknownType(Failure):
	def __init__(self, name:str):
		self.name = name
	def describe(self): return "No user-defined type is called %s" % self.name

class NotACase(Failure):
	def __init__(self, record_name:str, type_name:str):
		self.record_name, self.type_name = record_name, type_name
	def describe(self): return "%s is not a case of %s" % (self.record_name, self.type_name)

class NotExhaustive(Failure):
	def __init__(self, type_name:str, missing:Sequence[str]):
		self.type_name, self.missing = type_name, tuple(missing)
	def describe(self):
		return "Type-case over %s lacks clauses for %s" % (self.type_name, ", ".join(self.missing))

class LetrecRequiresProcedures(Failure):
	def __init__(self, site:Phrase):
		self.site = site
	def describe(self): return "letrec only supports binding procedures: %s" % self.site
