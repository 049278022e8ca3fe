"""
Specimen programs, built straight from the syntax constructors.
With no parser in the picture, these little helpers stand in for concrete syntax.
"""
from unittest import mock

from casework import syntax
from casework.calculus import NUM, ProcType, UserDefinedName, UserDefined, Record, Field
from casework.diagnostics import Report

class Silence(Report):
	def __init__(self):
		super().__init__(verbose=False, max_issues=30)
		self.complain_to_console = mock.Mock()
	pass

def name(n): return UserDefinedName(n)
def param(n, texp): return syntax.FormalParameter(n, texp)
def lit(value): return syntax.Literal(value)
def quote(datum): return syntax.Quotation(datum)
def var(n): return syntax.Lookup(n)
def prim(op): return syntax.PrimOp(op)

def call(fn, *args):
	if isinstance(fn, str): fn = var(fn)
	return syntax.Call(fn, args)

def op(operator, *args): return syntax.Call(prim(operator), args)
def cond(test, then_part, else_part): return syntax.Cond(test, then_part, else_part)

def lam(params, return_type, *body):
	return syntax.LambdaForm([param(*p) for p in params], return_type, body)

def bind(n, texp, value): return syntax.Binding(param(n, texp), value)
def let(bindings, *body): return syntax.Let(bindings, body)
def letrec(bindings, *body): return syntax.LetRec(bindings, body)
def define(n, texp, value): return syntax.Define(param(n, texp), value)
def assign(n, value): return syntax.Assign(n, value)

def record(n, *fields): return Record(n, [Field(*f) for f in fields])
def variant(n, *records): return syntax.DefineType(UserDefined(n, records))

def arm(record_name, pattern, *body): return syntax.Alternative(record_name, pattern, body)
def case(type_name, subject, *arms): return syntax.TypeCase(type_name, subject, arms)

def program(*exps): return syntax.Program(exps)

# (define-type Shape (Circle (r : number)) (Square (s : number)))
SHAPE = variant("Shape", record("Circle", ("r", NUM)), record("Square", ("s", NUM)))

# (define-type NumList (Empty) (Cons (head : number) (tail : NumList)))
NUM_LIST = variant("NumList", record("Empty"), record("Cons", ("head", NUM), ("tail", name("NumList"))))

# Every case recurs, so there is no way to build one.
LOOP = variant("Loop", record("Again", ("next", name("Loop"))))

# Mutually recursive, with the base case on the far side.
TREE = variant("Tree", record("Node", ("kids", name("Forest"))))
FOREST = variant("Forest", record("Nil"), record("Grove", ("first", name("Tree")), ("rest", name("Forest"))))

# A procedure-typed field never forces construction.
STREAM = variant("Stream", record("More", ("head", NUM), ("next", ProcType((), name("Stream")))))

def circle(r=1): return call("make-Circle", lit(r))
def square(s=2): return call("make-Square", lit(s))

def area_case(subject, circle_body=None, square_body=None):
	""" (type-case Shape subject (Circle (r) r) (Square (s) s)) """
	return case(
		"Shape", subject,
		arm("Circle", ["r"], circle_body or var("r")),
		arm("Square", ["s"], square_body or var("s")),
	)

def factorial():
	""" (define (fact : (number -> number)) (lambda ((n : number)) : number (if (< n 1) 1 (* n (fact (- n 1)))))) """
	body = cond(op("<", var("n"), lit(1)), lit(1), op("*", var("n"), call("fact", op("-", var("n"), lit(1)))))
	return define("fact", ProcType((NUM,), NUM), lam([("n", NUM)], NUM, body))

def list_sum():
	""" Add up a NumList by recursion over its cases. """
	body = case(
		"NumList", var("l"),
		arm("Empty", [], lit(0)),
		arm("Cons", ["h", "t"], op("+", var("h"), call("sum", var("t")))),
	)
	return define("sum", ProcType((name("NumList"),), NUM), lam([("l", name("NumList"))], NUM, body))
