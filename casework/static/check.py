"""
The expression type checker.

Every annotation is given, so there is nothing to infer: each rule works out
the type of a form from the types of its parts, and checks those parts against
whatever the program declared. A rule that gets a failure back from one of its
parts passes that failure straight up. The first failure is the verdict.

Failures get reported to the Report at the point where they are detected,
and nowhere else, so each run contributes at most one issue.
"""
# ----------------------------------------------------------------

from typing import Optional, Sequence
from boozetools.support.foundation import Visitor
from .. import syntax
from ..ontology import TypeExpression, Phrase, ValueExpression
from ..calculus import TExp, ProcType, TypeVariable, UserDefinedName, BOOL, VOID, LIT
from ..environment import TypeEnv
from ..primitive import literal_type, signature
from ..diagnostics import Report
from .domain import Failure, UnknownPrimitive, NotAProcedure, ArityMismatch, UnknownRecord, LetrecRequiresProcedures
from .roadmap import RoadMap, initial_environment
from .lattice import check_compatible, check_cover_type
from .validation import validate_user_defined_types, validate_type_case

__all__ = ["TypeChecker", "type_of_expression", "type_of_program", "initial_environment"]

class TypeChecker(Visitor):
	"""
	The `lenient` flag reproduces some historical behavior:
	a type-case is neither validated nor checked against its subject,
	and the type of (set! x ...) is a type variable named x, not void.
	"""
	_roadmap: RoadMap

	def __init__(self, report:Report, *, lenient:bool=False):
		self._report = report
		self._lenient = lenient

	def check_program(self, program:syntax.Program) -> TypeExpression:
		self._roadmap = RoadMap(program)
		env = self._roadmap.initial_environment()
		return self._sequence(program.exps, env, top_level=True)

	def check_expression(self, expr:ValueExpression, env:TypeEnv, program:syntax.Program) -> TypeExpression:
		self._roadmap = RoadMap(program)
		return self.check(expr, env)

	def check(self, expr:ValueExpression, env:TypeEnv) -> TypeExpression:
		judgement = self.visit(expr, env)
		assert isinstance(judgement, TypeExpression), (type(expr), judgement)
		return judgement

	def _sequence(self, exps:Sequence[ValueExpression], env:TypeEnv, top_level=False) -> TypeExpression:
		# Each member gets checked, but only the last one's type counts.
		# A define is in scope for whatever follows it.
		assert exps, "Cannot type an empty sequence"
		judgement = VOID
		for expr in exps:
			if top_level: self._report.info("Type-Check", expr)
			judgement = self.check(expr, env)
			if judgement.is_error(): return judgement
			if isinstance(expr, syntax.Define):
				env = env.extend([expr.param.name], [expr.param.texp])
		return judgement

	def _fail(self, failure:Failure) -> Failure:
		self._report.failure(failure)
		return failure

	def _expect(self, computed:TExp, declared:TExp, site:Phrase) -> TypeExpression:
		judgement = check_compatible(computed, declared, site, self._roadmap)
		if judgement.is_error(): self._report.failure(judgement)
		return judgement

	def _cover(self, types:Sequence[TExp]) -> TypeExpression:
		judgement = check_cover_type(types, self._roadmap)
		if judgement.is_error(): self._report.failure(judgement)
		return judgement

	@staticmethod
	def visit_Literal(expr:syntax.Literal, env:TypeEnv) -> TypeExpression:
		texp = literal_type(expr.value)
		assert texp is not None, "No literal type for %r" % (expr.value,)
		return texp

	@staticmethod
	def visit_Quotation(expr:syntax.Quotation, env:TypeEnv) -> TypeExpression:
		return LIT

	def visit_Lookup(self, expr:syntax.Lookup, env:TypeEnv) -> TypeExpression:
		judgement = env.lookup(expr.name)
		if judgement.is_error(): self._report.failure(judgement)
		return judgement

	def visit_PrimOp(self, expr:syntax.PrimOp, env:TypeEnv) -> TypeExpression:
		# The occurrence itself is the site, so re-checking it gives the same variables.
		proc_type = signature(expr.op, site=expr)
		if proc_type is None: return self._fail(UnknownPrimitive(expr.op))
		return proc_type

	def visit_Cond(self, cond:syntax.Cond, env:TypeEnv) -> TypeExpression:
		test = self.check(cond.test, env)
		if test.is_error(): return test
		judgement = self._expect(test, BOOL, cond.test)
		if judgement.is_error(): return judgement
		then_type = self.check(cond.then_part, env)
		if then_type.is_error(): return then_type
		else_type = self.check(cond.else_part, env)
		if else_type.is_error(): return else_type
		if not check_compatible(then_type, else_type, cond, self._roadmap).is_error():
			return else_type
		return self._cover([then_type, else_type])

	def visit_LambdaForm(self, lf:syntax.LambdaForm, env:TypeEnv) -> TypeExpression:
		inner = env.extend(lf.param_names(), lf.param_types())
		body = self._sequence(lf.body, inner)
		if body.is_error(): return body
		judgement = self._expect(body, lf.return_type, lf)
		if judgement.is_error(): return judgement
		return ProcType(lf.param_types(), lf.return_type)

	def visit_Call(self, call:syntax.Call, env:TypeEnv) -> TypeExpression:
		fn_type = self.check(call.fn_exp, env)
		if fn_type.is_error(): return fn_type
		if not isinstance(fn_type, ProcType): return self._fail(NotAProcedure(fn_type, call))
		if fn_type.arity() != len(call.args):
			return self._fail(ArityMismatch(call, fn_type.arity(), len(call.args)))
		for arg, param_type in zip(call.args, fn_type.param_types):
			arg_type = self.check(arg, env)
			if arg_type.is_error(): return arg_type
			# A generic slot of a primitive takes anything.
			if isinstance(param_type, TypeVariable): continue
			judgement = self._expect(arg_type, param_type, arg)
			if judgement.is_error(): return judgement
		return fn_type.return_type

	def visit_Let(self, let:syntax.Let, env:TypeEnv) -> TypeExpression:
		# The bindings cannot see one another.
		for b in let.bindings:
			value = self.check(b.value, env)
			if value.is_error(): return value
			judgement = self._expect(value, b.param.texp, b)
			if judgement.is_error(): return judgement
		return self._sequence(let.body, env.extend(let.names(), let.declared_types()))

	def visit_LetRec(self, letrec:syntax.LetRec, env:TypeEnv) -> TypeExpression:
		for b in letrec.bindings:
			if not isinstance(b.value, syntax.LambdaForm):
				return self._fail(LetrecRequiresProcedures(b))
		# Each name is bound to its procedure's own header, whatever the declaration says.
		header_types = [ProcType(b.value.param_types(), b.value.return_type) for b in letrec.bindings]
		for b, header in zip(letrec.bindings, header_types):
			judgement = self._expect(header, b.param.texp, b)
			if judgement.is_error(): return judgement
		headers = env.extend(letrec.names(), header_types)
		for b in letrec.bindings:
			lf = b.value
			body = self._sequence(lf.body, headers.extend(lf.param_names(), lf.param_types()))
			if body.is_error(): return body
			judgement = self._expect(body, lf.return_type, lf)
			if judgement.is_error(): return judgement
		return self._sequence(letrec.body, headers)

	def visit_Define(self, d:syntax.Define, env:TypeEnv) -> TypeExpression:
		# The name is in scope for its own value, which permits recursion.
		value = self.check(d.value, env.extend([d.param.name], [d.param.texp]))
		if value.is_error(): return value
		judgement = self._expect(value, d.param.texp, d)
		if judgement.is_error(): return judgement
		return VOID

	def visit_DefineType(self, dt:syntax.DefineType, env:TypeEnv) -> TypeExpression:
		problem = validate_user_defined_types(self._roadmap)
		if problem is not None: return self._fail(problem)
		return VOID

	def visit_Assign(self, a:syntax.Assign, env:TypeEnv) -> TypeExpression:
		value = self.check(a.value, env)
		if value.is_error(): return value
		target = env.lookup(a.name)
		if target.is_error(): return self._fail(target)
		if self._lenient: return TypeVariable(a.name)
		judgement = self._expect(value, target, a)
		if judgement.is_error(): return judgement
		return VOID

	def visit_TypeCase(self, tc:syntax.TypeCase, env:TypeEnv) -> TypeExpression:
		if not self._lenient:
			problem = validate_type_case(tc, self._roadmap)
			if problem is not None: return self._fail(problem)
			subject = self.check(tc.subject, env)
			if subject.is_error(): return subject
			judgement = self._expect(subject, UserDefinedName(tc.type_name), tc.subject)
			if judgement.is_error(): return judgement
		arm_types = []
		for alt in tc.alternatives:
			judgement = self._check_alternative(alt, env)
			if judgement.is_error(): return judgement
			arm_types.append(judgement)
		return self._cover(arm_types)

	def _check_alternative(self, alt:syntax.Alternative, env:TypeEnv) -> TypeExpression:
		record = self._roadmap.record(alt.record_name)
		if record.is_error(): return self._fail(UnknownRecord(alt.record_name))
		# Validation sees to this, except in lenient mode.
		if len(alt.pattern) != len(record.fields):
			return self._fail(ArityMismatch(alt, len(record.fields), len(alt.pattern)))
		return self._sequence(alt.body, env.extend(alt.pattern, record.field_types()))


def type_of_expression(
		expr:ValueExpression, env:TypeEnv, program:syntax.Program,
		report:Optional[Report]=None, *, lenient=False,
) -> TypeExpression:
	"""
	The type of one expression against an environment, in the context of a program.
	Pair it with initial_environment(program) to check further expressions
	against a program that has already been checked.
	"""
	checker = TypeChecker(report or Report(), lenient=lenient)
	return checker.check_expression(expr, env, program)

def type_of_program(program:syntax.Program, report:Optional[Report]=None, *, lenient=False) -> TypeExpression:
	""" The type of a whole program is that of its last top-level expression. """
	return TypeChecker(report or Report(), lenient=lenient).check_program(program)
