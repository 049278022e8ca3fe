import unittest

from casework.calculus import NUM, STR
from casework.static.roadmap import RoadMap
from casework.static.validation import validate_user_defined_types, validate_type_case
from casework.static import domain
from zoo import (
	program, variant, record, name, lit, var, arm, case, area_case,
	SHAPE, NUM_LIST, LOOP, TREE, FOREST, STREAM,
)

def _roadmap(*declarations):
	return RoadMap(program(*declarations, lit(0)))

class UserDefinedTypeTests(unittest.TestCase):

	def test_well_formed(self):
		for specimen in [[SHAPE], [NUM_LIST], [TREE, FOREST], [STREAM], [SHAPE, NUM_LIST]]:
			with self.subTest(len(specimen)):
				self.assertIsNone(validate_user_defined_types(_roadmap(*specimen)))

	def test_identical_redeclaration_is_fine(self):
		again = variant("Round", record("Circle", ("r", NUM)))
		self.assertIsNone(validate_user_defined_types(_roadmap(SHAPE, again)))

	def test_mismatched_record_in_either_order(self):
		other = variant("Round", record("Circle", ("radius", NUM)))
		for declarations in [(SHAPE, other), (other, SHAPE)]:
			with self.subTest(declarations[0].ud_type.type_name):
				judgement = validate_user_defined_types(_roadmap(*declarations))
				self.assertIsInstance(judgement, domain.RecordMismatch)
				self.assertEqual("Circle", judgement.name)

	def test_field_type_matters(self):
		other = variant("Round", record("Circle", ("r", STR)))
		self.assertIsInstance(validate_user_defined_types(_roadmap(SHAPE, other)), domain.RecordMismatch)

	def test_mismatched_type_redeclaration(self):
		other = variant("Shape", record("Circle", ("r", NUM)))
		judgement = validate_user_defined_types(_roadmap(SHAPE, other))
		self.assertIsInstance(judgement, domain.RecordMismatch)
		self.assertEqual("Shape", judgement.name)

	def test_no_base_case(self):
		judgement = validate_user_defined_types(_roadmap(SHAPE, LOOP))
		self.assertIsInstance(judgement, domain.NoBaseCase)
		self.assertEqual("Loop", judgement.type_name)

	def test_mutual_recursion_without_escape(self):
		ping = variant("Ping", record("P", ("pong", name("Pong"))))
		pong = variant("Pong", record("Q", ("ping", name("Ping"))))
		judgement = validate_user_defined_types(_roadmap(ping, pong))
		self.assertIsInstance(judgement, domain.NoBaseCase)
		self.assertEqual("Ping", judgement.type_name)

	def test_blame_falls_on_the_self_recurring_type(self):
		a = variant("A", record("A1", ("c", name("C"))))
		c = variant("C", record("C1", ("c", name("C"))))
		judgement = validate_user_defined_types(_roadmap(a, c))
		self.assertIsInstance(judgement, domain.NoBaseCase)
		self.assertEqual("C", judgement.type_name)


class TypeCaseTests(unittest.TestCase):

	def setUp(self):
		self.roadmap = _roadmap(SHAPE, NUM_LIST)

	def validate(self, *arms, type_name="Shape"):
		return validate_type_case(case(type_name, var("s"), *arms), self.roadmap)

	def test_well_formed(self):
		self.assertIsNone(validate_type_case(area_case(var("s")), self.roadmap))
		self.assertIsNone(self.validate(arm("Square", ["s"], lit(0)), arm("Circle", ["r"], lit(0))))
		self.assertIsNone(self.validate(arm("Empty", [], lit(0)), arm("Cons", ["h", "t"], var("h")), type_name="NumList"))

	def test_unknown_type(self):
		judgement = self.validate(arm("Circle", ["r"], lit(0)), type_name="Blob")
		self.assertIsInstance(judgement, domain.UnknownType)
		self.assertEqual("Blob", judgement.name)

	def test_unknown_type_is_not_a_record_either(self):
		self.assertIsInstance(self.validate(arm("Circle", ["r"], lit(0)), type_name="Circle"), domain.UnknownType)

	def test_duplicate_case(self):
		judgement = self.validate(arm("Circle", ["r"], lit(0)), arm("Circle", ["r"], lit(1)), arm("Square", ["s"], lit(2)))
		self.assertIsInstance(judgement, domain.DuplicateCase)
		self.assertEqual("Circle", judgement.record_name)

	def test_unknown_record(self):
		judgement = self.validate(arm("Circle", ["r"], lit(0)), arm("Triangle", ["a", "b"], lit(1)))
		self.assertIsInstance(judgement, domain.UnknownRecord)
		self.assertEqual("Triangle", judgement.name)

	def test_arity_mismatch(self):
		bad = arm("Circle", ["r", "extra"], lit(0))
		judgement = self.validate(bad, arm("Square", ["s"], lit(1)))
		self.assertIsInstance(judgement, domain.ArityMismatch)
		self.assertIs(bad, judgement.site)
		self.assertEqual((1, 2), (judgement.need, judgement.got))

	def test_not_a_case(self):
		judgement = self.validate(arm("Circle", ["r"], lit(0)), arm("Empty", [], lit(1)))
		self.assertIsInstance(judgement, domain.NotACase)
		self.assertEqual(("Empty", "Shape"), (judgement.record_name, judgement.type_name))

	def test_not_exhaustive(self):
		judgement = self.validate(arm("Circle", ["r"], lit(0)))
		self.assertIsInstance(judgement, domain.NotExhaustive)
		self.assertEqual(("Square",), judgement.missing)

	def test_duplicates_are_found_before_unknowns(self):
		judgement = self.validate(arm("Triangle", [], lit(0)), arm("Circle", ["r"], lit(0)), arm("Circle", ["r"], lit(0)))
		self.assertIsInstance(judgement, domain.DuplicateCase)


if __name__ == '__main__':
	unittest.main()
