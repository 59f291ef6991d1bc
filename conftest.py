"""
# Contention primitives for pytest. Provides the `test` fixture used by the
# project's test modules along with &Test, &Contention, and &Absurdity.

#!syntax/python
	def test_feature(test):
		test/feature.functionality() == expectation
		test/ValueError ^ (lambda: feature.failure())
"""
import builtins
import operator
import functools
import contextlib

import pytest

class Absurdity(AssertionError):
	"""
	# Exception raised by &Contention instances designating a failed assertion.
	"""

	# for re-constituting the expression
	operator_names_mapping = {
		'__eq__': '==',
		'__ne__': '!=',
		'__lt__': '<',
		'__gt__': '>',
		'__le__': '<=',
		'__ge__': '>=',

		'__mod__': 'is',
	}

	def __init__(self, operator, former, latter, inverse=None):
		super().__init__(operator, former, latter)
		self.operator = operator
		self.former = former
		self.latter = latter
		self.inverse = inverse

	def __str__(self):
		opchars = self.operator_names_mapping.get(self.operator, self.operator)
		prefix = ('not ' if self.inverse else '')
		return prefix + ' '.join((repr(self.former), opchars, repr(self.latter)))

class Contention(object):
	"""
	# Contentions are made by the true division operator of &Test instances
	# and raise &Absurdity when the comparison they perform does not hold.

	# True division is used as its precedence allows the assertion to be written
	# with minimal syntax: (python)`test/observed == expected`.
	"""
	__slots__ = ('test', 'object', 'storage', 'inverse')

	def __init__(self, test, object, inverse=False):
		self.test = test
		self.object = object
		self.inverse = inverse

	# Build comparison methods based on operator.
	_override = {
		'__mod__' : ('is', lambda x,y: x is y)
	}

	for k in ('__eq__', '__ne__', '__lt__', '__gt__', '__le__', '__ge__', '__mod__'):
		if k in _override:
			opname, v = _override[k]
		else:
			opname, v = k, getattr(operator, k)

		def check(self, ob, opname = opname, operator = v):
			x, y = self.object, ob
			if self.inverse:
				if operator(x, y): raise self.test.Absurdity(opname, x, y, inverse=True)
			else:
				if not operator(x, y): raise self.test.Absurdity(opname, x, y, inverse=False)
		locals()[k] = check
	del k, opname, v, check

	# Context manager exception traps.

	def __enter__(self, partial = functools.partial):
		return partial(getattr, self, 'storage', None)

	def __exit__(self, typ, val, tb):
		x = self.object
		y = self.storage = val
		if val is not None and not isinstance(val, Exception):
			# Control exceptions; pytest outcomes and interrupts.
			return

		if not isinstance(y, x): raise self.test.Absurdity("isinstance", x, y)
		return True

	def __xor__(self, subject):
		"""
		# Contend that the &subject raises the given exception when it is called:

		#!syntax/python
			test/Exception ^ (lambda: subject())
		"""
		with self as exc:
			subject()
		return exc()
	__rxor__ = __xor__

	def __lshift__(self, subject):
		"""
		# Contend that the parameter is contained by the object:

		#!syntax/python
			test/Container << subject
		"""
		if (subject in self.object) == self.inverse:
			raise self.test.Absurdity("contains", self.object, subject, inverse=self.inverse)
	__rlshift__ = __lshift__

class Test(object):
	"""
	# The object given to test functions for constructing &Contention instances.

	# [ Properties ]
	# /identifier/
		# The pytest node identifier of the test.
	# /exits/
		# A &contextlib.ExitStack closed when the test finishes.
	"""
	__slots__ = ('identifier', 'exits',)

	Absurdity = Absurdity
	Contention = Contention

	def __init__(self, identifier, ExitStack=contextlib.ExitStack):
		self.identifier = identifier
		self.exits = ExitStack()

	def __truediv__(self, object):
		return self.Contention(self, object)

	def __rtruediv__(self, object):
		return self.Contention(self, object)

	def __floordiv__(self, object):
		return self.Contention(self, object, True)

	def __rfloordiv__(self, object):
		return self.Contention(self, object, True)

	def isinstance(self, *args):
		if not builtins.isinstance(*args):
			raise self.Absurdity("isinstance", *args, inverse=True)

	def skip(self, condition):
		if condition: pytest.skip(str(condition))

	def fail(self, cause):
		pytest.fail(str(cause))

@pytest.fixture
def test(request):
	t = Test(request.node.nodeid)
	with t.exits:
		yield t
