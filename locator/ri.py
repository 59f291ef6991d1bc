"""
# Split, escape, and resolve Resource Indicators.

# &.ri provides the absolute reference procedures that &.reference builds on:
# splitting an indicator into its top-level components, percent-encoding the
# components with their respective character sets, and resolving a reference
# against a base as described by RFC 3986, section 5.2.

# Unlike the parse and serialize pairs found in the internet project, the
# functions here keep the components in their encoded form; decoding is only
# performed when fields are explicitly requested with &split_path or &parse_query.

# [ Entry Points ]
# - &parse
# - &join
# - &resolve

# [ Types ]
# The type field of &Parts is derived from the presence of the scheme and the
# authority:

# /authority/
	# A scheme followed by (characters)`'://'`.
# /absolute/
	# A scheme followed by a colon and no authority.
# /relative/
	# A pair of slashes without a scheme; the scheme is implied by context.
# /none/
	# Neither a scheme nor an authority. A path, query, or fragment reference.
"""
import re
import collections

class ParseError(ValueError):
	"""
	# Raised when a string cannot be accepted as a Resource Indicator.

	# [ Properties ]
	# /string/
		# The rejected text.
	# /reason/
		# Short description of the defect.
	"""

	def __init__(self, string, reason):
		super().__init__(string, reason)
		self.string = string
		self.reason = reason

	def __str__(self):
		return "%s: %r" %(self.reason, self.string)

_pct_encode = '%%%0.2X'.__mod__

scheme_re = re.compile('[A-Za-z][-+.0-9A-Za-z]*:')
percent_escapes_re = re.compile('(?:%[0-9a-fA-F]{2})+')
invalid_escape_re = re.compile('%(?![0-9a-fA-F]{2})')

class Escapes(dict):
	"""
	# Translation table for &str.translate that percent-encodes the configured
	# ASCII characters and every character outside of ASCII as UTF-8.
	"""
	__slots__ = ()

	def __missing__(self, key, chr=chr, map=map):
		if key < 0x80:
			# Leave the character untouched.
			raise LookupError(key)
		return ''.join(map(_pct_encode, chr(key).encode('utf-8', 'surrogatepass')))

_controls = [chr(x) for x in range(0, 0x20)] + ['\x7f']
_mktrans = (lambda z: Escapes({ord(x):_pct_encode(ord(x)) for x in _controls + list(z)}))

fragment_escapes = _mktrans(' "<>`')
query_escapes = _mktrans(' "#<>\'')
path_escapes = _mktrans(' "#<>?`{}')
segment_escapes = _mktrans(' "#<>?`{}/%')

form_safe = frozenset(b'*-._0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz')

def escape_path(string):
	return string.translate(path_escapes)

def escape_segment(string):
	"""
	# Escape a single path segment. Slashes and percent signs are encoded
	# so that the segment is recovered exactly by &unescape.
	"""
	return string.translate(segment_escapes)

def escape_query(string):
	return string.translate(query_escapes)

def escape_fragment(string):
	return string.translate(fragment_escapes)

def _decode_run(match):
	return bytes.fromhex(match.group(0).replace('%', '')).decode('utf-8', 'replace')

def unescape(string, sub=percent_escapes_re.sub):
	"""
	# Substitute percent escapes with the characters they encode.

	# Consecutive escapes are decoded together as UTF-8; invalid sequences
	# are replaced with U+FFFD. A percent sign that does not begin an escape
	# is left in place.
	"""
	return sub(_decode_run, string)

def form_escape(string, safe=form_safe, chr=chr):
	"""
	# Encode &string as an application/x-www-form-urlencoded field.
	"""
	return ''.join([
		chr(x) if x in safe else ('+' if x == 0x20 else _pct_encode(x))
		for x in string.encode('utf-8', 'surrogatepass')
	])

def form_unescape(string):
	return unescape(string.replace('+', ' '))

def parse_query(query, fieldproc=form_unescape):
	"""
	# Split an application/x-www-form-urlencoded query into a list of decoded
	# (key, value) pairs. Empty fields are skipped and a field without an
	# equals sign has an empty value.
	"""
	pairs = []
	for x in query.split('&'):
		if not x:
			continue
		k, _, v = x.partition('=')
		pairs.append((fieldproc(k), fieldproc(v)))
	return pairs

def construct_query(x, escape=form_escape):
	"""
	# Given a sequence of (key, value) pairs, construct the query string.
	# A &None value emits the key alone.
	"""

	return '&'.join([
		escape(k) if v is None else '='.join((escape(k), escape(v)))
		for k, v in x
	])

def split_path(p, fieldproc=unescape):
	"""
	# Return a list of unescaped strings split on "/".

	# Set `fieldproc` to `str` if the components' percent escapes should not be
	# decoded.
	"""

	return [fieldproc(x) for x in p.split('/')]

Parts = collections.namedtuple("Parts",
	('type', 'scheme', 'netloc', 'path', 'query', 'fragment')
)

def _type(scheme, netloc):
	if scheme is not None:
		return 'authority' if netloc is not None else 'absolute'
	return 'relative' if netloc is not None else 'none'

def split(ri, match=scheme_re.match):
	"""
	# Split an indicator into its top-level components based on the markers:

		# (: | ://), /, ?, #

	# The first (character)`#` always delimits the fragment; a (character)`?`
	# following it is fragment text. The path retains its leading slash.
	"""
	scheme = None
	netloc = None
	query = None
	fragment = None

	s = ri
	pos = 0
	end = len(s)

	m = match(s)
	if m is not None:
		pos = m.end()
		scheme = s[:pos-1]

	fragment_pos = s.find('#', pos)
	if fragment_pos != -1:
		fragment = s[fragment_pos+1:]
		end = fragment_pos

	query_pos = s.find('?', pos, end)
	if query_pos != -1:
		query = s[query_pos+1:end]
		end = query_pos

	if s.startswith('//', pos, end):
		path_pos = s.find('/', pos+2, end)
		if path_pos == -1:
			path_pos = end
		netloc = s[pos+2:path_pos]
		pos = path_pos

	return Parts(_type(scheme, netloc), scheme, netloc, s[pos:end], query, fragment)

def join(t):
	"""
	# Make an indicator from split &Parts.
	"""

	s = ''
	if t[1] is not None:
		s += t[1]
		s += ':'
	if t[2] is not None:
		s += '//'
		s += t[2]

	s += t[3]
	if t[4] is not None:
		s += '?'
		s += t[4]
	if t[5] is not None:
		s += '#'
		s += t[5]
	return s

unsplit = join

def parse(ri, split=split):
	"""
	# Split &ri and percent-encode its path, query, and fragment.

	# Raises &ParseError when a percent sign does not begin a valid escape.
	"""

	m = invalid_escape_re.search(ri)
	if m is not None:
		raise ParseError(ri, "invalid percent escape at %d" %(m.start(),))

	t = split(ri)
	return t._replace(
		path = escape_path(t.path),
		query = None if t.query is None else escape_query(t.query),
		fragment = None if t.fragment is None else escape_fragment(t.fragment),
	)

# Dot segments; percent encoded periods are recognized as well.
_current = {'.', '%2e'}
_parent = {'..', '.%2e', '%2e.', '%2e%2e'}

def remove_dot_segments(path, current=_current, parent=_parent):
	"""
	# Resolve the (character)`.` and (character)`..` segments within &path.

	# Ascension beyond the root is silently dropped. A trailing dot segment
	# leaves a trailing slash.
	"""

	if path[:1] == '/':
		root = '/'
		segments = path[1:].split('/')
	else:
		root = ''
		segments = path.split('/')

	r = []
	last = len(segments) - 1
	for i, x in enumerate(segments):
		lx = x.lower()
		if lx in current:
			pass
		elif lx in parent:
			if r:
				del r[-1]
		else:
			r.append(x)
			continue

		if i == last:
			r.append('')

	return root + '/'.join(r)

def merge(base, path):
	"""
	# Merge a relative &path with the path of the &base parts.
	"""

	if base.netloc is not None and not base.path:
		return '/' + path
	return base.path[:base.path.rfind('/')+1] + path

def resolve(base, reference, normal=remove_dot_segments):
	"""
	# Resolve the &reference parts against the &base parts.

	# [ Parameters ]
	# /base/
		# The &Parts of an indicator with a scheme.
	# /reference/
		# The &Parts of the reference to resolve; usually produced by &parse.
	"""
	r = reference

	if r.scheme is not None:
		scheme = r.scheme
		netloc = r.netloc
		path = normal(r.path)
		query = r.query
	else:
		scheme = base.scheme
		if r.netloc is not None:
			netloc = r.netloc
			path = normal(r.path)
			query = r.query
		else:
			netloc = base.netloc
			if not r.path:
				path = base.path
				query = r.query if r.query is not None else base.query
			else:
				if r.path[:1] == '/':
					path = normal(r.path)
				else:
					path = normal(merge(base, r.path))
				query = r.query

	return Parts(_type(scheme, netloc), scheme, netloc, path, query, r.fragment)
