'''
Four register stack tests
'''

from pytest import fixture, raises

from rpcalc.settings import FormatSettings
from rpcalc.stack import Stack


@fixture
def stack():
    s = Stack(FormatSettings())
    s.restore([1.0, 2.0, 3.0, 4.0])
    return s


def test_new_stack_is_zero():
    s = Stack(FormatSettings())
    assert list(s.values) == [0, 0, 0, 0]
    assert s.xstr == '0.0000'


def test_replace_top_two_duplicates_bottom(stack):
    stack.replace_top_two(9.0)
    assert list(stack.values) == [9, 3, 4, 4]
    assert stack.xstr == '9.0000'


def test_replace_top(stack):
    stack.replace_top(9.0)
    assert list(stack.values) == [9, 2, 3, 4]


def test_enter_drops_bottom(stack):
    stack.enter()
    assert list(stack.values) == [1, 1, 2, 3]


def test_push(stack):
    stack.push(7.0)
    assert list(stack.values) == [7, 1, 2, 3]
    assert stack.xstr == '7.0000'


def test_swap(stack):
    stack.swap()
    assert list(stack.values) == [2, 1, 3, 4]


def test_roll_down(stack):
    stack.roll_down()
    assert list(stack.values) == [2, 3, 4, 1]


def test_roll_up(stack):
    stack.roll_up()
    assert list(stack.values) == [4, 1, 2, 3]


def test_clear(stack):
    stack.clear()
    assert list(stack.values) == [0, 0, 0, 0]


def test_depth_never_changes(stack):
    for operation in [stack.enter, stack.swap, stack.roll_down,
                      stack.roll_up, stack.clear]:
        operation()
        assert len(stack) == 4
    for number in range(10):
        stack.push(float(number))
        stack.replace_top_two(float(number))
        assert len(stack) == 4


def test_registers_bottom_first(stack):
    assert stack.registers() == '4.0000\n3.0000\n2.0000'


def test_buffer_follows_settings(stack):
    stack.settings.places = 2
    stack.update_buffer()
    assert stack.xstr == '1.00'
    stack.settings.scientific = True
    stack.update_buffer()
    assert stack.xstr == '1.00 x10^0'


def test_update_x_from_buffer(stack):
    stack.xstr = '2.5 x10^2'
    stack.update_x()
    assert stack.x == 250


def test_update_x_ignores_garbage(stack):
    stack.xstr = 'Reg 0-9:'
    stack.update_x()
    assert stack.x == 1


def test_restore_needs_four(stack):
    with raises(ValueError):
        stack.restore([1.0, 2.0])
    assert list(stack.values) == [1, 2, 3, 4]
