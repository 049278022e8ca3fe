import sys, random
from typing import Any, Optional, Sequence
from boozetools.support.foundation import Visitor

from .ontology import Phrase
from .calculus import render
from .static import domain

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Hmm. ", "", ""]

	minced_oaths = [
		'Bother', 'Blast', 'Drat', 'Fiddlesticks', 'Gosh',
		'Good Grief', 'Great Scott', 'Heavens', 'Jeepers',
		'Mercy', 'Nuts', 'Rats', 'Shucks', 'Zounds',
	]

	resignations = [
		'These types do not add up.',
		'I cannot vouch for this program.',
		'Something here does not fit.',
		'I need a second opinion.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	"""
	Collects the issues from one or more type-checking runs
	and knows how to explain them to a human being.
	"""
	_issues : list["Pic"]

	def __init__(self, *, verbose:int=0, max_issues:Optional[int]=None):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	def issue(self, it:Any):
		self._issues.append(it)
		# Only a caller who asks for a limit ever gets interrupted.
		if self._max_issues is not None and len(self._issues) >= self._max_issues:
			raise TooManyIssues(self)

	def issues(self) -> list["Pic"]:
		return list(self._issues)

	def reset(self):
		self._issues.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def failure(self, failure:domain.Failure):
		""" Make an entry for a failure judgement """
		assert failure.is_error(), failure
		self.issue(_EXPLAIN.visit(failure))

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

class Annotation:
	def __init__(self, node:Phrase, caption:str=""):
		assert isinstance(node, Phrase), node
		self.text = str(node)
		self.caption = caption
	def illustrate(self):
		if self.caption: return "    %s\n      ^ %s" % (self.text, self.caption)
		return "    " + self.text

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer=()):
		self.intro, self._anns, self._footer = intro, anns, footer
	def as_text(self):
		lines = [self.intro]
		lines.extend(ann.illustrate() for ann in self._anns)
		lines.extend(self._footer)
		return '\n'.join(lines)

class _Explain(Visitor):
	""" Turn each kind of failure judgement into a picture for the console. """

	@staticmethod
	def visit_UnboundVariable(f:domain.UnboundVariable):
		return Pic("I don't see what '%s' refers to." % f.name, [])

	@staticmethod
	def visit_NotFound(f:domain.NotFound):
		return Pic("There is no type or record called '%s'." % f.name, [])

	@staticmethod
	def visit_UnknownPrimitive(f:domain.UnknownPrimitive):
		return Pic("'%s' is not a primitive I know about." % f.name, [])

	@staticmethod
	def visit_IncompatibleTypes(f:domain.IncompatibleTypes):
		intro = "Type-checking found %s where %s was expected:" % (render(f.computed), render(f.expected))
		return Pic(intro, [Annotation(f.site, "in here")])

	@staticmethod
	def visit_NotAProcedure(f:domain.NotAProcedure):
		intro = "Dunno how to call %s as a procedure." % render(f.texp)
		return Pic(intro, [Annotation(f.site)])

	@staticmethod
	def visit_ArityMismatch(f:domain.ArityMismatch):
		plural = '' if f.need == 1 else 's'
		caption = "This takes %d argument%s, but got %d instead." % (f.need, plural, f.got)
		return Pic("Type-checking found a disagreement over arguments.", [Annotation(f.site, caption)])

	@staticmethod
	def visit_NoCommonType(f:domain.NoCommonType):
		intro = "These types have nothing in common: %s" % ", ".join(map(render, f.types))
		footer = ["Branches of a conditional (or arms of a type-case) need a common declared ancestor."]
		return Pic(intro, [], footer)

	@staticmethod
	def visit_RecordMismatch(f:domain.RecordMismatch):
		intro = "'%s' is declared more than once, and the declarations disagree." % f.name
		return Pic(intro, [])

	@staticmethod
	def visit_NoBaseCase(f:domain.NoBaseCase):
		intro = "Every case of '%s' refers back to '%s'." % (f.type_name, f.type_name)
		footer = ["A recursive type needs at least one case that does not recur."]
		return Pic(intro, [], footer)

	@staticmethod
	def visit_DuplicateCase(f:domain.DuplicateCase):
		return Pic("This type-case has more than one clause for '%s'." % f.record_name, [])

	@staticmethod
	def visit_UnknownRecord(f:domain.UnknownRecord):
		return Pic("There's no record called '%s'." % f.name, [])

	@staticmethod
	def visit_UnknownType(f:domain.UnknownType):
		return Pic("There's no user-defined type called '%s'." % f.name, [])

	@staticmethod
	def visit_NotACase(f:domain.NotACase):
		return Pic("'%s' is not a case of the type '%s'." % (f.record_name, f.type_name), [])

	@staticmethod
	def visit_NotExhaustive(f:domain.NotExhaustive):
		intro = "This type-case does not cover all the cases of '%s'." % f.type_name
		return Pic(intro, [], ["Missing: " + ", ".join(f.missing)])

	@staticmethod
	def visit_LetrecRequiresProcedures(f:domain.LetrecRequiresProcedures):
		return Pic("A letrec may only bind procedures.", [Annotation(f.site)])

_EXPLAIN = _Explain()

def _bemoan(issues:Sequence[Pic]):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
