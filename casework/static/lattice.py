"""
The nominal subtype relation and the cover-type (least common ancestor) algorithm.

A record is a subtype of every user-defined type that lists it as a case, and
everything is a subtype of `any`. Beyond that, types are related only by
equality: there is no structural subtyping among procedure types.

The cover of several types is the intersection of their ancestor sets.
Conditionals and type-case expressions take the most specific member of
that intersection as their type.
"""
from typing import Sequence
from boozetools.support.foundation import Visitor
from ..ontology import TypeExpression, Phrase
from ..calculus import (
	TExp, AtomicType, LiteralType, TypeVariable, ProcType,
	UserDefinedName, UserDefined, Record, ANY, is_named, is_atomic, deref,
)
from .domain import IncompatibleTypes, NoCommonType
from .roadmap import RoadMap

class ParentFinder(Visitor):
	"""
	Works out a type together with all its ancestors in the type hierarchy.
	User-defined types and records come back as UserDefinedName, so that
	ancestor lists from different sources can be compared by name.
	"""
	def __init__(self, roadmap:RoadMap):
		self._roadmap = roadmap

	@staticmethod
	def visit_AtomicType(t:AtomicType): return [t]

	@staticmethod
	def visit_LiteralType(t:LiteralType): return [t]

	@staticmethod
	def visit_TypeVariable(t:TypeVariable): return [t]

	@staticmethod
	def visit_ProcType(t:ProcType): return [t]

	@staticmethod
	def visit_UserDefined(t:UserDefined): return [UserDefinedName(t.type_name)]

	def visit_Record(self, t:Record):
		return self.visit(UserDefinedName(t.type_name))

	def visit_UserDefinedName(self, t:UserDefinedName):
		roadmap = self._roadmap
		if not roadmap.user_defined_type(t.type_name).is_error():
			return [t]
		if roadmap.record(t.type_name).is_error():
			return []
		parents = [t]
		for ud in roadmap.record_parents(t.type_name):
			for p in self.visit(UserDefinedName(ud.type_name)):
				if p not in parents: parents.append(p)
		return parents

def parents_of(t:TExp, roadmap:RoadMap) -> list[TExp]:
	return ParentFinder(roadmap).visit(t)

def is_subtype(a:TExp, b:TExp, roadmap:RoadMap) -> bool:
	""" Is `a` a subtype of `b`? """
	if b == ANY: return True
	if is_named(a) and is_named(b):
		if a.type_name == b.type_name: return True
		return any(p.type_name == b.type_name for p in parents_of(a, roadmap) if is_named(p))
	if isinstance(a, TypeVariable) and isinstance(b, TypeVariable):
		return a == b
	a, b = deref(a), deref(b)
	return is_atomic(a) and a == b

def check_compatible(computed:TExp, declared:TExp, site:Phrase, roadmap:RoadMap) -> TypeExpression:
	""" Can a value of the computed type go where the declared type is expected? """
	if declared == ANY: return declared
	if computed == declared: return declared
	if is_subtype(computed, declared, roadmap): return declared
	return IncompatibleTypes(computed, declared, site)

def cover_types(types:Sequence[TExp], roadmap:RoadMap) -> list[TExp]:
	""" The common ancestors of all the given types, in the order the first type lists them. """
	finder = ParentFinder(roadmap)
	each = iter(types)
	try: cover = finder.visit(next(each))
	except StopIteration: return []
	for t in each:
		parents = finder.visit(t)
		cover = [c for c in cover if c in parents]
	return cover

def most_specific_type(candidates:Sequence[TExp], roadmap:RoadMap) -> TExp:
	""" First-found wins among equals. """
	choice = ANY
	for c in candidates:
		if is_subtype(c, choice, roadmap): choice = c
	return choice

def check_cover_type(types:Sequence[TExp], roadmap:RoadMap) -> TypeExpression:
	cover = cover_types(types, roadmap)
	if not cover: return NoCommonType(types)
	return most_specific_type(cover, roadmap)
