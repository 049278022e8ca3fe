"""
Structural checks on declared variant types, and on the type-case
expressions that take them apart.

Each check returns None when all is well, or else the first failure found.
"""
from typing import Optional
from .. import syntax
from ..calculus import TExp, UserDefined, Record, is_named
from .domain import (
	Failure, RecordMismatch, NoBaseCase, DuplicateCase,
	UnknownRecord, UnknownType, ArityMismatch, NotACase, NotExhaustive,
)
from .roadmap import RoadMap

def validate_user_defined_types(roadmap:RoadMap) -> Optional[Failure]:
	return _check_redeclarations(roadmap) or _check_base_cases(roadmap)

def _check_redeclarations(roadmap:RoadMap) -> Optional[Failure]:
	# The same name may be declared twice only if the declarations agree exactly.
	first_record = {}
	for r in roadmap.records():
		prior = first_record.setdefault(r.type_name, r)
		if prior.fields != r.fields: return RecordMismatch(r.type_name)
	first_type = {}
	for ud in roadmap.type_declarations():
		prior = first_type.setdefault(ud.type_name, ud)
		if prior != ud: return RecordMismatch(ud.type_name)
	return None

def _check_base_cases(roadmap:RoadMap) -> Optional[Failure]:
	inhabited = _inhabited_names(roadmap)
	stuck = [ud for ud in roadmap.type_declarations() if ud.type_name not in inhabited]
	if not stuck: return None
	# Blame a type that recurs into itself before one that merely depends on such.
	for ud in stuck:
		if ud.type_name in _names_reachable_from(ud, roadmap):
			return NoBaseCase(ud.type_name)
	return NoBaseCase(stuck[0].type_name)

def _names_reachable_from(ud:UserDefined, roadmap:RoadMap) -> set[str]:
	""" Names of types and records mentioned by the fields of the given type, transitively. """
	seen = set()
	pending = [t for r in ud.records for t in r.field_types()]
	while pending:
		t = pending.pop()
		if not is_named(t) or t.type_name in seen: continue
		seen.add(t.type_name)
		target = roadmap.type_by_name(t.type_name)
		if isinstance(target, UserDefined):
			pending.extend(f for r in target.records for f in r.field_types())
		elif isinstance(target, Record):
			pending.extend(target.field_types())
	return seen

def _inhabited_names(roadmap:RoadMap) -> set[str]:
	"""
	Names of the records and types that can be constructed in finitely many steps.
	A record with no fields is a base case. So is any record whose fields are
	all of types already known to have one. Iterate to the fixed point.
	"""
	inhabited = set()

	def can_build(t:TExp) -> bool:
		# A procedure never forces construction of what it mentions.
		if not is_named(t): return True
		# An undeclared name is somebody else's problem.
		if roadmap.type_by_name(t.type_name).is_error(): return True
		return t.type_name in inhabited

	progress = True
	while progress:
		progress = False
		for ud in roadmap.type_declarations():
			for r in ud.records:
				if r.type_name not in inhabited and all(map(can_build, r.field_types())):
					inhabited.add(r.type_name)
					progress = True
			if ud.type_name not in inhabited and any(n in inhabited for n in ud.record_names()):
				inhabited.add(ud.type_name)
				progress = True
	return inhabited

def validate_type_case(tc:syntax.TypeCase, roadmap:RoadMap) -> Optional[Failure]:
	"""
	Exactly one clause for each case of the type (in any order),
	and each clause binds exactly as many names as its record has fields.
	"""
	ud = roadmap.user_defined_type(tc.type_name)
	if ud.is_error(): return UnknownType(tc.type_name)
	assert isinstance(ud, UserDefined)

	seen = set()
	for alt in tc.alternatives:
		if alt.record_name in seen: return DuplicateCase(alt.record_name)
		seen.add(alt.record_name)

	for alt in tc.alternatives:
		record = roadmap.record(alt.record_name)
		if record.is_error(): return UnknownRecord(alt.record_name)
		need, got = len(record.fields), len(alt.pattern)
		if need != got: return ArityMismatch(alt, need, got)
		if alt.record_name not in ud.record_names(): return NotACase(alt.record_name, tc.type_name)

	missing = [name for name in ud.record_names() if name not in seen]
	if missing: return NotExhaustive(tc.type_name, missing)
	return None
