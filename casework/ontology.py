"""
These most-fundamental classes are separate from the rest to avoid
various circular-import scenarios. The type calculus, the failure
judgements, and the syntax tree all hang off of these, and the
type-checker only ever deals in the abstractions defined here.
"""

class Phrase:
	""" Anything the parser hands us. Renders back to concrete syntax for error messages. """
	def __str__(self) -> str:
		raise NotImplementedError(type(self))

class ValueExpression(Phrase):
	pass

class TypeExpression:
	"""
	A type judgement. Either an honest type, or else a failure
	explaining why there is no honest type to be had.
	"""
	def visit(self, visitor):
		raise NotImplementedError(type(self))
	def is_error(self) -> bool:
		return False
