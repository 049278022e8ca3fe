"""
The set of parse-nodes in simple form.
Whatever parser feeds the checker calls these constructors bottom-up.
Every node knows how to print itself back as concrete syntax,
which is how error messages show the guilty expression.

Type annotations arrive already in the form of calculus.TExp objects.
"""
from typing import Any, Sequence
from .ontology import Phrase, ValueExpression
from .calculus import TExp, UserDefined, render

def _body(exps:Sequence[ValueExpression]) -> tuple[ValueExpression, ...]:
	exps = tuple(exps)
	assert exps, "A body must contain at least one expression."
	for e in exps: assert isinstance(e, ValueExpression), e
	return exps

def _spaced(items) -> str:
	return " ".join(map(str, items))

class FormalParameter(Phrase):
	""" A variable with its declared type, as in (x : number) """
	def __init__(self, name:str, texp:TExp):
		assert isinstance(texp, TExp), texp
		self.name, self.texp = name, texp
	def __str__(self): return "(%s : %s)" % (self.name, render(self.texp))

class Literal(ValueExpression):
	def __init__(self, value: Any):
		self.value = value
	def __str__(self):
		if self.value is True: return "#t"
		if self.value is False: return "#f"
		if isinstance(self.value, str): return '"%s"' % self.value
		return str(self.value)

class Quotation(ValueExpression):
	""" Quoted data. The checker never looks inside. """
	def __init__(self, datum: Any):
		self.datum = datum
	def __str__(self): return "'" + _datum(self.datum)

def _datum(d) -> str:
	if isinstance(d, (list, tuple)): return "(%s)" % " ".join(map(_datum, d))
	return str(d)

class PrimOp(ValueExpression):
	def __init__(self, op:str):
		self.op = op
	def __str__(self): return self.op

class Lookup(ValueExpression):
	def __init__(self, name:str):
		self.name = name
	def __str__(self): return self.name

class Cond(ValueExpression):
	def __init__(self, test: ValueExpression, then_part: ValueExpression, else_part: ValueExpression):
		self.test, self.then_part, self.else_part = test, then_part, else_part
	def __str__(self): return "(if %s %s %s)" % (self.test, self.then_part, self.else_part)

class LambdaForm(ValueExpression):
	params: tuple[FormalParameter, ...]
	return_type: TExp
	body: tuple[ValueExpression, ...]

	def __init__(self, params:Sequence[FormalParameter], return_type:TExp, body:Sequence[ValueExpression]):
		self.params = tuple(params)
		self.return_type = return_type
		self.body = _body(body)

	def param_names(self): return [p.name for p in self.params]
	def param_types(self): return [p.texp for p in self.params]

	def __str__(self):
		return "(lambda (%s) : %s %s)" % (_spaced(self.params), render(self.return_type), _spaced(self.body))

class Call(ValueExpression):
	def __init__(self, fn_exp: ValueExpression, args: Sequence[ValueExpression]):
		self.fn_exp, self.args = fn_exp, tuple(args)
	def __str__(self):
		return "(%s)" % _spaced((self.fn_exp,) + self.args)

class Binding(Phrase):
	def __init__(self, param:FormalParameter, value:ValueExpression):
		self.param, self.value = param, value
	def __str__(self): return "(%s %s)" % (self.param, self.value)

class _BindingForm(ValueExpression):
	keyword: str
	def __init__(self, bindings:Sequence[Binding], body:Sequence[ValueExpression]):
		self.bindings = tuple(bindings)
		self.body = _body(body)
	def names(self): return [b.param.name for b in self.bindings]
	def declared_types(self): return [b.param.texp for b in self.bindings]
	def __str__(self):
		return "(%s (%s) %s)" % (self.keyword, _spaced(self.bindings), _spaced(self.body))

class Let(_BindingForm):
	keyword = "let"

class LetRec(_BindingForm):
	keyword = "letrec"

class Define(ValueExpression):
	def __init__(self, param:FormalParameter, value:ValueExpression):
		self.param, self.value = param, value
	def __str__(self): return "(define %s %s)" % (self.param, self.value)

class Assign(ValueExpression):
	""" The set! form """
	def __init__(self, name:str, value:ValueExpression):
		self.name, self.value = name, value
	def __str__(self): return "(set! %s %s)" % (self.name, self.value)

class DefineType(ValueExpression):
	def __init__(self, ud_type:UserDefined):
		assert isinstance(ud_type, UserDefined), ud_type
		self.ud_type = ud_type
	def __str__(self):
		cases = []
		for r in self.ud_type.records:
			fields = "".join(" (%s : %s)" % (f.field_name, render(f.texp)) for f in r.fields)
			cases.append("(%s%s)" % (r.type_name, fields))
		return "(define-type %s %s)" % (self.ud_type.type_name, " ".join(cases))

class Alternative(Phrase):
	""" One arm of a type-case: the record it matches, the names bound to its fields, and a body. """
	def __init__(self, record_name:str, pattern:Sequence[str], body:Sequence[ValueExpression]):
		self.record_name = record_name
		self.pattern = tuple(pattern)
		self.body = _body(body)
	def __str__(self):
		return "(%s (%s) %s)" % (self.record_name, " ".join(self.pattern), _spaced(self.body))

class TypeCase(ValueExpression):
	def __init__(self, type_name:str, subject:ValueExpression, alternatives:Sequence[Alternative]):
		self.type_name = type_name
		self.subject = subject
		self.alternatives = tuple(alternatives)
	def __str__(self):
		return "(type-case %s %s %s)" % (self.type_name, self.subject, _spaced(self.alternatives))

class Program(Phrase):
	""" The whole of what got parsed: a non-empty sequence of top-level expressions. """
	def __init__(self, exps:Sequence[ValueExpression]):
		self.exps = _body(exps)
	def __str__(self): return "\n".join(map(str, self.exps))
