import pytest

from ormgql import api
from ormgql.annotations import Exclude, FilterGroupCondition, Filters
from ormgql.exceptions import OrmGqlError
from ormgql.readers import AttributeReader, Reader, ReaderChain
from tests.models import Post, User


class RecordingReader(Reader):
    """Reader answering every lookup with a fixed annotation."""

    def __init__(self, annotation):
        self.annotation = annotation
        self.calls = []

    def get_class_annotations(self, cls):
        self.calls.append(cls)
        return [self.annotation]

    def get_method_annotations(self, method):
        self.calls.append(method)
        return [self.annotation]

    def get_property_annotations(self, prop):
        self.calls.append(prop)
        return [self.annotation]


class TestAttributeReader:
    reader = AttributeReader()

    def test_class_annotation(self):
        filters = self.reader.get_class_annotation(Post, Filters)
        assert filters is not None
        assert self.reader.get_class_annotation(User, Filters) is None

    def test_method_annotation(self):
        assert self.reader.get_method_annotation(User.get_password, Exclude) is not None
        assert self.reader.get_method_annotation(User.get_name, Exclude) is None

    def test_property_annotation_from_column_info(self):
        assert self.reader.get_property_annotation(User.password, Exclude) is not None
        assert self.reader.get_property_annotation(User.name, Exclude) is None

        condition = self.reader.get_property_annotation(Post.rating, FilterGroupCondition)
        assert condition is not None
        assert condition.type == 'Optional[str]'


class TestReaderChain:
    def test_first_matching_namespace_wins(self):
        models_reader = RecordingReader(Exclude())
        other_reader = RecordingReader(Exclude())
        chain = ReaderChain({'app.other': other_reader, 'TESTS.models': models_reader})

        assert chain.get_class_annotations(Post)
        assert models_reader.calls == [Post]
        assert other_reader.calls == []

    def test_non_reader_sources_are_skipped(self):
        default = RecordingReader(Exclude())
        chain = ReaderChain({'tests': object()}, default=default)

        assert chain.get_method_annotation(User.get_name, Exclude) is not None
        assert default.calls == [User.get_name]

    def test_property_lookup_uses_declaring_class(self):
        models_reader = RecordingReader(Exclude())
        chain = ReaderChain()
        chain.add('tests.models', models_reader)

        assert chain.get_property_annotation(User.password, Exclude) is not None
        assert 'tests.models' in chain.readers

    def test_missing_reader_is_fatal(self):
        chain = ReaderChain({'app': AttributeReader()}, default='not a reader')
        with pytest.raises(OrmGqlError, match=r'ormgql requires `tests\.models\.Post` entity to be configured'):
            chain.get_class_annotations(Post)

    def test_chain_delegates_to_attribute_reader(self):
        chain = ReaderChain({'tests': AttributeReader()})
        assert chain.get_class_annotation(Post, Filters) is api.own_annotations(Post)[0]
