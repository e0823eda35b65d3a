from __future__ import annotations

import pytest

from voidsync.mind.memory import LocalMemory


def test_file_backed_roundtrip(tmp_path):
    memory = LocalMemory(tmp_path / 'state')
    memory.set('mind_role', 'sender')
    assert (tmp_path / 'state' / 'mind_role.json').exists()
    assert LocalMemory(tmp_path / 'state').get('mind_role') == 'sender'


def test_missing_key_returns_default(memory):
    assert memory.get('mind_patterns') is None
    assert memory.get('mind_patterns', {}) == {}


def test_corrupt_file_returns_default(tmp_path):
    state = tmp_path / 'state'
    state.mkdir()
    (state / 'mind_patterns.json').write_text('{broken', encoding='utf-8')
    assert LocalMemory(state).get('mind_patterns', {}) == {}


def test_in_memory_values_are_copies():
    memory = LocalMemory()
    table = {'touch_9': {'count': 1, 'occurrences': [1]}}
    memory.set('mind_patterns', table)
    table['touch_9']['count'] = 99
    assert memory.get('mind_patterns')['touch_9']['count'] == 1


def test_rejects_path_like_keys(memory):
    with pytest.raises(ValueError):
        memory.set('../escape', 1)


def test_no_temp_files_left_behind(tmp_path):
    state = tmp_path / 'state'
    memory = LocalMemory(state)
    for i in range(3):
        memory.set('mind_patterns', {'touch_9': {'count': i, 'occurrences': []}})
    assert sorted(p.name for p in state.iterdir()) == ['mind_patterns.json']
