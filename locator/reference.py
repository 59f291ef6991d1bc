"""
# Relative references: a path, an optional query, and an optional fragment.

# &Reference stores the relative reference inside a fixed absolute indicator,
# the &anchor, so that the splitting, escaping, and resolution procedures of
# &.ri apply without modification. The anchor is removed from every
# observation; &Reference.as_str is the canonical form.

#!syntax/python
	r = Reference('/index.html?page=2#top')
	r.join('../assets/style.css').as_str() # '/assets/style.css'

# [ Entry Points ]
# - &Reference
# - &split

# [ Engineering ]
# Construction with &Reference is infallible. Only &Reference.join and
# &Reference.parse perform resolution, and only they raise &ReferenceParseError.
"""
import functools
from . import ri

ReferenceParseError = ri.ParseError

@functools.lru_cache(1)
def anchor():
	"""
	# The &ri.Parts whose scheme and authority prefix the stored form of every &Reference.
	"""
	return ri.split('http://_')

def split(text):
	"""
	# Split &text into its path, query, and fragment fields.

	# The positions of the first (character)`?` and the first (character)`#`
	# select the delimiters. A (character)`?` following the first (character)`#`
	# is fragment text. An empty query or fragment is present as an empty string;
	# an absent field is &None.
	"""
	q = text.find('?')
	f = text.find('#')

	if f == -1:
		if q == -1:
			return (text, None, None)
		return (text[:q], text[q+1:], None)

	if q == -1 or f < q:
		return (text[:f], None, text[f+1:])

	return (text[:q], text[q+1:f], text[f+1:])

def _rooted(path):
	return path if path[:1] == '/' else '/' + path

class PathView(object):
	"""
	# Editor for the path segments of a &Reference.

	# Every operation is committed to the reference immediately; there is no
	# pending state held by the view. Operations return the view so that
	# they may be chained.
	"""
	__slots__ = ('reference',)

	def __init__(self, reference):
		self.reference = reference

	def __iter__(self):
		return iter(self.reference.path_segments())

	def __len__(self):
		return len(self.reference.path_segments())

	def push(self, segment):
		"""
		# Append a segment to the path. Dot segments are ignored.
		"""
		if segment in ('.', '..'):
			return self

		path = self.reference.path
		s = ri.escape_segment(segment)
		if path == '/':
			path += s
		else:
			path += '/' + s

		self.reference.path = path
		return self

	def extend(self, segments):
		for x in segments:
			self.push(x)
		return self

	def pop(self):
		"""
		# Remove the last segment. No effect when the path is the root.
		"""
		path = self.reference.path
		if path != '/':
			self.reference.path = path[:path.rfind('/')] or '/'
		return self

	def pop_if_empty(self):
		"""
		# Remove the last segment if it is empty; a trailing slash.
		"""
		path = self.reference.path
		if path != '/' and path[-1:] == '/':
			self.reference.path = path[:-1]
		return self

	def clear(self):
		"""
		# Reset the path to the root, (character)`/`.
		"""
		self.reference.path = '/'
		return self

class QueryView(object):
	"""
	# Editor for the query of a &Reference viewed as a sequence of
	# application/x-www-form-urlencoded pairs.

	# Like &PathView, changes are committed to the reference immediately.
	"""
	__slots__ = ('reference',)

	def __init__(self, reference):
		self.reference = reference

	def __iter__(self):
		return iter(self.reference.query_pairs())

	def _append(self, field):
		q = self.reference.query
		self.reference.query = q + '&' + field if q else field
		return self

	def append_pair(self, key, value):
		return self._append(ri.construct_query([(key, value)]))

	def append_key_only(self, key):
		return self._append(ri.construct_query([(key, None)]))

	def extend_pairs(self, pairs):
		for k, v in pairs:
			self.append_pair(k, v)
		return self

	def clear(self):
		"""
		# Remove all pairs. The query remains present, but empty.
		"""
		self.reference.query = ''
		return self

@functools.total_ordering
class Reference(object):
	"""
	# A path, query, and fragment without a scheme or authority.

	# Equality, ordering, and hashing are defined by the stored form.

	# [ Properties ]
	# /path/
		# The percent-encoded path; always begins with (character)`/`.
		# Assignments are encoded and rooted.
	# /query/
		# The percent-encoded query or &None if absent.
	# /fragment/
		# The fragment or &None if absent.
	"""
	__slots__ = ('_form',)

	def __init__(self, text='/'):
		path, query, fragment = split(text)
		self._assemble(
			_rooted(ri.escape_path(path)),
			None if query is None else ri.escape_query(query),
			None if fragment is None else ri.escape_fragment(fragment),
		)

	@classmethod
	def _from_form(Class, form):
		r = Class.__new__(Class)
		r._form = form
		return r

	@classmethod
	def parse(Class, text):
		"""
		# Construct a reference by resolving &text against the root.
		# Dot segments are removed.

		# Raises &ReferenceParseError when &text is malformed or is not relative.
		"""
		return Class().join(text)

	def _assemble(self, path, query, fragment):
		self._form = ri.join(anchor()._replace(path=path, query=query, fragment=fragment))

	def _fields(self):
		return ri.split(self._form)[3:]

	def as_str(self):
		"""
		# The stored form without the anchor.
		"""
		return ri.join(ri.Parts('none', None, None, *self._fields()))

	def __str__(self):
		return self.as_str()

	def __repr__(self):
		return "%s(%r)" %(self.__class__.__name__, self.as_str())

	def __eq__(self, operand):
		if not isinstance(operand, Reference):
			return NotImplemented
		return self._form == operand._form

	def __lt__(self, operand):
		if not isinstance(operand, Reference):
			return NotImplemented
		return self._form < operand._form

	def __hash__(self):
		return hash(self._form)

	def copy(self):
		return self._from_form(self._form)

	__copy__ = copy

	@property
	def path(self):
		return self._fields()[0]

	@path.setter
	def path(self, path):
		p, q, f = self._fields()
		self._assemble(_rooted(ri.escape_path(path)), q, f)

	@property
	def query(self):
		return self._fields()[1]

	@query.setter
	def query(self, query):
		p, q, f = self._fields()
		self._assemble(p, None if query is None else ri.escape_query(query), f)

	@property
	def fragment(self):
		return self._fields()[2]

	@fragment.setter
	def fragment(self, fragment):
		p, q, f = self._fields()
		self._assemble(p, q, None if fragment is None else ri.escape_fragment(fragment))

	def path_segments(self):
		"""
		# The decoded segments of the path. The root path is a single empty segment.
		"""
		return ri.split_path(self.path[1:])

	def path_segments_mut(self) -> PathView:
		return PathView(self)

	def query_pairs(self):
		"""
		# The decoded (key, value) pairs of the query; empty when absent.
		"""
		q = self.query
		if q is None:
			return []
		return ri.parse_query(q)

	def query_pairs_mut(self) -> QueryView:
		return QueryView(self)

	def join(self, reference):
		"""
		# Resolve &reference against &self and return the result as a new &Reference.

		# Raises &ReferenceParseError when &reference contains an invalid percent
		# escape or carries a scheme or authority. &self is never modified.
		"""
		r = ri.parse(reference)
		if r.type != 'none':
			raise ReferenceParseError(reference, "scheme or authority in relative reference")

		t = ri.resolve(ri.split(self._form), r)
		return self._from_form(ri.join(t))

	# Non-destructive forms of the setters and views.

	def with_path(self, path):
		r = self.copy()
		r.path = path
		return r

	def with_query(self, query):
		r = self.copy()
		r.query = query
		return r

	def with_fragment(self, fragment):
		r = self.copy()
		r.fragment = fragment
		return r

	def with_path_segments_mut(self, operation):
		"""
		# Copy &self and call &operation with the copy's &PathView.
		"""
		r = self.copy()
		operation(r.path_segments_mut())
		return r

	def with_query_pairs_mut(self, operation):
		"""
		# Copy &self and call &operation with the copy's &QueryView.
		"""
		r = self.copy()
		operation(r.query_pairs_mut())
		return r
