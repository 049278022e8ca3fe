"""
Read-only views over one parsed program.

The RoadMap collects the top-level definitions and type declarations once,
and indexes every user-defined type and record by name. Names in type
expressions (UserDefinedName) are keys into this registry, never owning
references, so recursive and mutually-recursive declarations are no trouble.
"""
from typing import Sequence, TypeVar, Union
from .. import syntax
from ..ontology import TypeExpression
from ..calculus import (
	TExp, UserDefined, Record, UserDefinedName, ProcType, ANY, BOOL,
)
from ..environment import TypeEnv, EMPTY, extend
from .domain import NotFound

Item = TypeVar("Item", UserDefined, Record)

def find_by_name(name:str, items:Sequence[Item]) -> Union[Item, NotFound]:
	for item in items:
		if item.type_name == name: return item
	return NotFound(name)

class RoadMap:
	program: syntax.Program
	_definitions: list[syntax.Define]
	_type_declarations: list[UserDefined]
	_records: list[Record]

	def __init__(self, program: syntax.Program):
		assert isinstance(program, syntax.Program), program
		self.program = program
		self._definitions = [e for e in program.exps if isinstance(e, syntax.Define)]
		self._type_declarations = [e.ud_type for e in program.exps if isinstance(e, syntax.DefineType)]
		self._records = [r for ud in self._type_declarations for r in ud.records]

	def definitions(self) -> list[syntax.Define]: return list(self._definitions)
	def type_declarations(self) -> list[UserDefined]: return list(self._type_declarations)
	def records(self) -> list[Record]: return list(self._records)

	def user_defined_type(self, name:str) -> Union[UserDefined, NotFound]:
		# First declaration wins. The validator sees to it that any others agree.
		return find_by_name(name, self._type_declarations)

	def record(self, name:str) -> Union[Record, NotFound]:
		return find_by_name(name, self._records)

	def type_by_name(self, name:str) -> TypeExpression:
		""" The user-defined type by this name if there is one, else the record. """
		ud = self.user_defined_type(name)
		return self.record(name) if ud.is_error() else ud

	def record_parents(self, name:str) -> list[UserDefined]:
		""" Every user-defined type that has the named record as one of its cases. """
		return [ud for ud in self._type_declarations if name in ud.record_names()]

	def initial_environment(self) -> TypeEnv:
		names, types = [], []
		def bind(name:str, texp:TExp):
			names.append(name)
			types.append(texp)
		predicate = ProcType((ANY,), BOOL)
		for d in self._definitions:
			bind(d.param.name, d.param.texp)
		for ud in self._type_declarations:
			bind(ud.type_name, UserDefinedName(ud.type_name))
			bind(ud.type_name+"?", predicate)
		for r in self._records:
			bind(r.type_name, UserDefinedName(r.type_name))
			bind(r.type_name+"?", predicate)
			bind("make-"+r.type_name, ProcType(r.field_types(), UserDefinedName(r.type_name)))
		return extend(names, types, EMPTY)

def initial_environment(program: syntax.Program) -> TypeEnv:
	return RoadMap(program).initial_environment()
