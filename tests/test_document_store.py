import json
import os

import pytest

from destinity_erp.repositories.base import (
    DocumentStore,
    DuplicateKeyError,
    SchemaValidationError,
    StoreError,
    is_valid_id,
    new_object_id,
)


@pytest.fixture
def store(tmp_path):
    s = DocumentStore(str(tmp_path / 'data'))
    yield s
    s.close()


@pytest.fixture
def people(store):
    return store.collection('people', unique_fields=['email'], required_fields=['name'])


def _seed(people):
    people.insert_one({'name': 'Ana', 'email': 'ana@mx', 'status': 'Activo', 'job': {'area': 'Ventas'}})
    people.insert_one({'name': 'Beto', 'email': 'beto@mx', 'status': 'Baja', 'job': {'area': 'Compras'}})
    people.insert_one({'name': 'Carla', 'email': 'carla@mx', 'status': 'Activo', 'job': {'area': 'Ventas'}})


def test_ids():
    new_id = new_object_id()
    assert is_valid_id(new_id)
    assert len(new_id) == 24
    assert not is_valid_id('123')
    assert not is_valid_id('Z' * 24)
    assert not is_valid_id(None)


def test_insert_and_find_by_id(people):
    doc_id = people.insert_one({'name': 'Ana', 'email': 'ana@mx'})
    assert is_valid_id(doc_id)
    assert people.find_by_id(doc_id) == {'_id': doc_id, 'name': 'Ana', 'email': 'ana@mx'}
    assert people.find_by_id(new_object_id()) is None


def test_unique_field(people):
    people.insert_one({'name': 'Ana', 'email': 'ana@mx'})
    with pytest.raises(DuplicateKeyError) as exc:
        people.insert_one({'name': 'Otra Ana', 'email': 'ana@mx'})
    assert exc.value.field == 'email'
    assert people.count() == 1


def test_required_field(people):
    with pytest.raises(SchemaValidationError):
        people.insert_one({'email': 'sin-nombre@mx'})
    with pytest.raises(SchemaValidationError):
        people.insert_one({'name': None, 'email': 'nulo@mx'})


def test_update_one(people):
    doc_id = people.insert_one({'name': 'Ana', 'email': 'ana@mx'})
    assert people.update_one(doc_id, {'name': 'Ana'}) == 0
    assert people.update_one(doc_id, {'name': 'Ana María'}) == 1
    assert people.find_by_id(doc_id)['name'] == 'Ana María'
    assert people.update_one(new_object_id(), {'name': 'X'}) == 0


def test_update_respects_unique_and_schema(people):
    people.insert_one({'name': 'Ana', 'email': 'ana@mx'})
    beto = people.insert_one({'name': 'Beto', 'email': 'beto@mx'})
    with pytest.raises(DuplicateKeyError):
        people.update_one(beto, {'email': 'ana@mx'})
    with pytest.raises(SchemaValidationError):
        people.update_one(beto, {'name': None})
    assert people.find_by_id(beto)['email'] == 'beto@mx'


def test_delete_one(people):
    doc_id = people.insert_one({'name': 'Ana', 'email': 'ana@mx'})
    assert people.delete_one(doc_id) == 1
    assert people.delete_one(doc_id) == 0
    assert people.count() == 0


def test_filters(people):
    _seed(people)
    assert [d['name'] for d in people.find({'status': 'Activo'})] == ['Ana', 'Carla']
    assert [d['name'] for d in people.find({'job.area': 'Compras'})] == ['Beto']
    assert [d['name'] for d in people.find({'name': {'$regex': 'AR', '$options': 'i'}})] == ['Carla']
    assert people.find({'name': {'$regex': 'AR'}}) == []
    assert [d['name'] for d in people.find({'$or': [{'name': 'Ana'}, {'name': 'Beto'}]})] == ['Ana', 'Beto']
    assert [d['name'] for d in people.find({'$and': [{'status': 'Activo'}, {'job.area': 'Ventas'}]})] == ['Ana', 'Carla']
    assert people.count({'status': 'Activo'}) == 2


def test_skip_and_limit(people):
    _seed(people)
    assert [d['name'] for d in people.find(skip=1, limit=1)] == ['Beto']
    assert [d['name'] for d in people.find(skip=2, limit=5)] == ['Carla']
    assert people.find(skip=3, limit=5) == []


def test_returned_documents_are_copies(people):
    doc_id = people.insert_one({'name': 'Ana', 'email': 'ana@mx', 'job': {'area': 'Ventas'}})
    doc = people.find_one({'name': 'Ana'})
    doc['job']['area'] = 'Compras'
    assert people.find_by_id(doc_id)['job']['area'] == 'Ventas'


def test_data_survives_reopen(tmp_path):
    data_dir = str(tmp_path / 'data')
    first = DocumentStore(data_dir)
    doc_id = first.collection('people').insert_one({'name': 'Ana'})
    first.close()

    second = DocumentStore(data_dir)
    assert second.collection('people').find_by_id(doc_id)['name'] == 'Ana'
    second.close()


def test_corrupted_file_raises(store):
    people = store.collection('people')
    with open(os.path.join(store.data_dir, 'people.json'), 'w', encoding='utf-8') as f:
        f.write('{no es json')
    with pytest.raises(StoreError):
        people.find()


def test_closed_store_rejects_collections(store):
    store.close()
    assert store.closed
    with pytest.raises(StoreError):
        store.collection('people')


def test_close_invalidates_open_collections(store, people):
    _seed(people)
    store.close()

    assert people.closed
    with pytest.raises(StoreError):
        people.count()
    with pytest.raises(StoreError):
        people.insert_one({'name': 'Dora', 'email': 'dora@mx'})


def test_ids_reject_trailing_newline():
    assert not is_valid_id(new_object_id() + '\n')


def test_file_is_plain_json(store):
    people = store.collection('people')
    doc_id = people.insert_one({'name': 'Ñandú'})
    with open(os.path.join(store.data_dir, 'people.json'), encoding='utf-8') as f:
        assert json.load(f)[doc_id]['name'] == 'Ñandú'
