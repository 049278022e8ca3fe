"""
The data over which the type-checker operates.

Type expressions are value objects: two of them are the same type exactly when
they have the same class and the same key. That makes them hashable, so they
work in sets and as dictionary keys, and it makes plain `==` into structural
equality.

User-defined types and their records refer to one another by name, through
UserDefinedName, rather than by holding each other. Recursive types therefore
never become cyclic data. The program-level registry (see static/roadmap.py)
is where a name finds its definition.

Type variables exist only to keep the generic slots of separate primitive
call sites apart. There is no substitution store: a type variable is nothing
more than a name with identity.
"""
from typing import NamedTuple, Sequence
from .ontology import TypeExpression

class TExp(TypeExpression):
	""" Value objects so they can play well with sets and dictionaries """
	def __init__(self, *key):
		self._key = key
		self._hash = hash(key)
	def __hash__(self): return self._hash
	def __eq__(self, other): return type(self) is type(other) and self._key == other._key
	def __repr__(self) -> str:
		it = self.visit(Render())
		assert isinstance(it, str), (it, type(self))
		return it

class AtomicType(TExp):
	def __init__(self, name:str):
		self.name = name
		super().__init__(name)
	def visit(self, visitor:"TypeVisitor"): return visitor.on_atomic(self)

class LiteralType(TExp):
	""" The type of quoted data. It has no further structure. """
	def visit(self, visitor:"TypeVisitor"): return visitor.on_literal(self)

class TypeVariable(TExp):
	"""
	A placeholder identity. The optional site qualifies the name,
	so that each occurrence of a generic primitive gets its own
	variables, but the same occurrence always gets the same ones.
	"""
	def __init__(self, name:str, site=None):
		self.name, self.site = name, site
		super().__init__(name, site)
	def visit(self, visitor:"TypeVisitor"): return visitor.on_variable(self)

class ProcType(TExp):
	def __init__(self, param_types:Sequence[TExp], return_type:TExp):
		self.param_types = tuple(param_types)
		self.return_type = return_type
		super().__init__(self.param_types, return_type)
	def visit(self, visitor:"TypeVisitor"): return visitor.on_proc(self)
	def arity(self) -> int: return len(self.param_types)

class UserDefinedName(TExp):
	""" A reference, by name, to either a user-defined type or one of its records. """
	def __init__(self, type_name:str):
		self.type_name = type_name
		super().__init__(type_name)
	def visit(self, visitor:"TypeVisitor"): return visitor.on_name(self)

class Field(NamedTuple):
	field_name: str
	texp: TExp

class Record(TExp):
	""" One case of a variant type. """
	def __init__(self, type_name:str, fields:Sequence[Field]):
		assert all(isinstance(f, Field) for f in fields), fields
		self.type_name = type_name
		self.fields = tuple(fields)
		super().__init__(type_name, self.fields)
	def visit(self, visitor:"TypeVisitor"): return visitor.on_record(self)
	def field_types(self): return [f.texp for f in self.fields]

class UserDefined(TExp):
	""" The full declaration of a variant type, which owns its records. """
	def __init__(self, type_name:str, records:Sequence[Record]):
		assert all(isinstance(r, Record) for r in records), records
		self.type_name = type_name
		self.records = tuple(records)
		super().__init__(type_name, self.records)
	def visit(self, visitor:"TypeVisitor"): return visitor.on_user_defined(self)
	def record_names(self): return [r.type_name for r in self.records]

NUM = AtomicType("number")
BOOL = AtomicType("boolean")
STR = AtomicType("string")
VOID = AtomicType("void")
ANY = AtomicType("any")
LIT = LiteralType()

NAMED_TYPES = (UserDefinedName, UserDefined, Record)

def is_atomic(t:TypeExpression) -> bool:
	return isinstance(t, (AtomicType, LiteralType))

def is_named(t:TypeExpression) -> bool:
	return isinstance(t, NAMED_TYPES)

def deref(t:TExp) -> TExp:
	# No substitution store exists, so an unbound variable is just itself.
	return t

###################
#

class TypeVisitor:
	def on_atomic(self, a:AtomicType): raise NotImplementedError(type(self))
	def on_literal(self, l:LiteralType): raise NotImplementedError(type(self))
	def on_variable(self, v:TypeVariable): raise NotImplementedError(type(self))
	def on_proc(self, p:ProcType): raise NotImplementedError(type(self))
	def on_name(self, n:UserDefinedName): raise NotImplementedError(type(self))
	def on_record(self, r:Record): raise NotImplementedError(type(self))
	def on_user_defined(self, ud:UserDefined): raise NotImplementedError(type(self))
	def on_failure(self, f): raise NotImplementedError(type(self))


class Render(TypeVisitor):
	""" Return the concrete syntax for a type. """
	def on_atomic(self, a: AtomicType): return a.name
	def on_literal(self, l: LiteralType): return "literal"
	def on_variable(self, v: TypeVariable): return v.name
	def on_proc(self, p: ProcType):
		if p.param_types: params = " * ".join(t.visit(self) for t in p.param_types)
		else: params = "Empty"
		return "(%s -> %s)"%(params, p.return_type.visit(self))
	def on_name(self, n: UserDefinedName): return n.type_name
	def on_record(self, r: Record): return r.type_name
	def on_user_defined(self, ud: UserDefined): return ud.type_name
	def on_failure(self, f): return "<Error: %s>"%f.describe()

def render(t:TypeExpression) -> str:
	return t.visit(Render())
