from types import SimpleNamespace

from minitest.assertions import ASSERTION_NAMES, AssertionContext, install


def test_install_into_mapping_binds_every_operation():
    ctx = AssertionContext()
    scope = {}
    installed = install(scope, ctx)

    assert installed == list(ASSERTION_NAMES)
    scope["assert_equal"](1, "1")
    scope["refute"](False)
    assert ctx.assertions == 2


def test_install_skips_existing_callables():
    ctx = AssertionContext()

    def host_assert_(*args):
        return "host"

    scope = {"assert_": host_assert_, "refute": "not callable"}
    installed = install(scope, ctx)

    assert scope["assert_"] is host_assert_
    assert "assert_" not in installed
    assert "refute" in installed
    assert scope["refute"] == ctx.refute


def test_install_onto_object_with_selected_names():
    ctx = AssertionContext()
    target = SimpleNamespace(flunk=lambda: None)
    installed = install(target, ctx, names=["assert_nil", "flunk"])

    assert installed == ["assert_nil"]
    assert target.assert_nil(None)
    assert not hasattr(target, "assert_equal")
