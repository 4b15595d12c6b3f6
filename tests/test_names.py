import pytest

from staff_rota.names import MatchKind, NameResolver, levenshtein


@pytest.fixture
def names():
	return NameResolver()


class TestLevenshtein:
	def test_known_distance(self):
		assert levenshtein('kitten', 'sitting') == 3

	@pytest.mark.parametrize(('a', 'b'), [('kitten', 'sitting'), ('rob', 'robert'), ('', 'abc'), ('jane', 'john')])
	def test_symmetric(self, a, b):
		assert levenshtein(a, b) == levenshtein(b, a)

	def test_identity(self):
		assert levenshtein('margaret', 'margaret') == 0

	def test_empty(self):
		assert levenshtein('', 'abc') == 3
		assert levenshtein('abc', '') == 3


class TestNormalize:
	def test_strips_title_punctuation_and_keeps_first_name(self, names):
		assert names.normalize('Dr. Jane  Smith') == 'jane'

	def test_full_name_when_not_first_name_only(self):
		assert NameResolver(first_name_only=False).normalize('Mrs. Mary-Ann  Jones') == 'maryann jones'

	def test_title_needs_a_following_name(self, names):
		assert names.normalize('Drew') == 'drew'

	@pytest.mark.parametrize('value', ['', None, '   '])
	def test_empty(self, names, value):
		assert names.normalize(value) == ''


class TestSimilar:
	@pytest.mark.parametrize(
		('a', 'b'),
		[
			('Robert Smith', 'Rob'),
			('Rob', 'Robert'),
			('Bill', 'William Jones'),
			('Micheal', 'Michael'),
		],
	)
	def test_similar(self, names, a, b):
		assert names.similar(a, b)
		assert names.similar(b, a)

	@pytest.mark.parametrize(('a', 'b'), [('Jane', 'John'), ('Susan', 'Patricia'), ('', 'Rob')])
	def test_not_similar(self, names, a, b):
		assert not names.similar(a, b)


class TestMatchKind:
	@pytest.mark.parametrize(
		('a', 'b', 'kind'),
		[
			('Jane Doe', 'jane', MatchKind.EXACT),
			('Bob', 'Robert', MatchKind.NICKNAME),
			('Chris', 'Christine', MatchKind.NICKNAME),
			('Alexandra', 'Alex', MatchKind.SUBSTRING),
			('Rob', 'Richard', MatchKind.INITIAL),
			('Micheal', 'Michael', MatchKind.EDIT_DISTANCE),
		],
	)
	def test_first_rule_wins(self, names, a, b, kind):
		assert names.match_kind(a, b) == kind

	def test_strong_kinds(self):
		assert MatchKind.SUBSTRING.is_strong
		assert not MatchKind.INITIAL.is_strong
		assert not MatchKind.EDIT_DISTANCE.is_strong

	def test_short_names_skip_edit_distance(self, names):
		assert names.match_kind('Al', 'Ed') is None


class TestPortalName:
	def test_mapping_wins(self):
		names = NameResolver(mappings={'Rob': 'Robert Smith'})
		assert names.portal_name('Rob') == 'Robert Smith'

	def test_unmapped_name_is_unchanged(self, names):
		assert names.portal_name('Jane') == 'Jane'
