'''
Settings, memory and stack persistence tests
'''

import json
import logging

from pytest import fixture

from rpcalc.machine import Machine
from rpcalc.memory import MemoryBank
from rpcalc.persistence import JSONStore, MemoryStore, restore_settings
from rpcalc.settings import AngleUnit, FormatSettings


@fixture
def path(tmp_path):
    return tmp_path / 'state.json'


def test_defaults():
    settings, memory = restore_settings({})
    assert settings == FormatSettings()
    assert memory == MemoryBank()


def test_restores_valid_fields():
    settings, memory = restore_settings({
        'angle_unit': 'grad',
        'places': 0,
        'scientific': True,
        'show_registers': False,
        'persist_stack': False,
        'memory': list(range(10)),
    })
    assert settings == FormatSettings(angle_unit=AngleUnit.GRADIANS,
                                      places=0,
                                      scientific=True,
                                      show_registers=False,
                                      persist_stack=False)
    assert memory.recall(9) == 9.0


def test_invalid_fields_default(caplog):
    with caplog.at_level(logging.WARNING, logger='rpcalc'):
        settings, memory = restore_settings({
            'angle_unit': 'turns',
            'places': 10,
            'scientific': 'yes',
            'memory': [1, 2],
        })
    assert settings == FormatSettings()
    assert memory == MemoryBank()
    assert len(caplog.records) == 4


def test_rejects_lookalike_types():
    settings, memory = restore_settings({
        'places': True,
        'angle_unit': ['deg'],
        'memory': ['1'] * 10,
    })
    assert settings.places == 4
    assert settings.angle_unit is AngleUnit.DEGREES
    assert memory == MemoryBank()


def test_stack_shape():
    assert MemoryStore().load_stack() is None
    assert MemoryStore({'stack': [1, 2, 3]}).load_stack() is None
    assert MemoryStore({'stack': [1, 2, 3, False]}).load_stack() is None
    assert MemoryStore({'stack': [1, 2, 3, 4.5]}).load_stack() == \
        [1.0, 2.0, 3.0, 4.5]


def test_json_round_trip(path):
    store = JSONStore(path)
    settings = FormatSettings(angle_unit=AngleUnit.RADIANS, places=7)
    memory = MemoryBank()
    memory.store(3, 2.5)
    store.save_settings(settings, memory)
    store.save_stack([1.0, 2.0, 3.0, 4.0])

    store = JSONStore(path)
    assert store.load_settings() == (settings, memory)
    assert store.load_stack() == [1.0, 2.0, 3.0, 4.0]

    data = json.loads(path.read_text(encoding='utf-8'))
    assert data['angle_unit'] == 'rad'
    assert data['memory'][3] == 2.5


def test_json_missing_file(path):
    store = JSONStore(path)
    assert store.load_settings() == (FormatSettings(), MemoryBank())
    assert store.load_stack() is None


def test_json_corrupt_file(path):
    path.write_text('{not json', encoding='utf-8')
    store = JSONStore(path)
    assert store.load_settings() == (FormatSettings(), MemoryBank())
    assert store.load_stack() is None


def test_json_not_an_object(path):
    path.write_text('[1, 2, 3, 4]', encoding='utf-8')
    assert JSONStore(path).load_stack() is None


def test_json_creates_directory(tmp_path):
    store = JSONStore(tmp_path / 'deeper' / 'state.json')
    store.save_stack([0.0, 0.0, 0.0, 1.0])
    assert store.load_stack() == [0.0, 0.0, 0.0, 1.0]


def test_infinities_survive(path):
    store = JSONStore(path)
    store.save_stack([float('inf'), 0.0, 0.0, 0.0])
    assert store.load_stack()[0] == float('inf')


def test_across_sessions(path):
    machine = Machine(store=JSONStore(path))
    machine.feed(['7', 'sto', '3', 'plcs', '2', '4', 'ent'])

    machine = Machine(store=JSONStore(path))
    assert machine.memory.recall(3) == 7
    assert machine.settings.places == 2
    assert list(machine.stack.values) == [4, 4, 7, 0]
    assert machine.stack.xstr == '4.00'
