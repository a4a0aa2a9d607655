from pytest_archon import archrule


def test_core_independence() -> None:
    """
    The core package must not depend on any backend adapter package
    or on a backend client library.
    """
    (
        archrule("core_is_independent")
        .match("expiry_hooks.*")
        .should_not_import("expiry_hooks_redis*")
        .should_not_import("redis*")
        .check("expiry_hooks")
    )


def test_domain_isolation() -> None:
    """
    Domain layer should be self-contained.
    It must not import from adapters, ports, events or the services built on it.
    """
    (
        archrule("domain_isolation")
        .match("expiry_hooks.domain*")
        .should_not_import("expiry_hooks.adapters*")
        .should_not_import("expiry_hooks.ports*")
        .should_not_import("expiry_hooks.events*")
        .should_not_import("expiry_hooks.scheduling*")
        .should_not_import("expiry_hooks.tracking*")
        .check("expiry_hooks")
    )


def test_primitives_isolation() -> None:
    """
    Primitives layer is the lowest level.
    It must not import from any other part of the package.
    """
    (
        archrule("primitives_isolation")
        .match("expiry_hooks.primitives*")
        .should_not_import("expiry_hooks.domain*")
        .should_not_import("expiry_hooks.adapters*")
        .should_not_import("expiry_hooks.ports*")
        .should_not_import("expiry_hooks.events*")
        .should_not_import("expiry_hooks.scheduling*")
        .should_not_import("expiry_hooks.tracking*")
        .check("expiry_hooks")
    )


def test_ports_layering() -> None:
    """
    Ports (interfaces) should not depend on Adapters (implementations)
    or on the services that consume them.
    """
    (
        archrule("ports_layering")
        .match("expiry_hooks.ports*")
        .should_not_import("expiry_hooks.adapters*")
        .should_not_import("expiry_hooks.scheduling*")
        .should_not_import("expiry_hooks.tracking*")
        .check("expiry_hooks")
    )


def test_adapters_do_not_reach_into_services() -> None:
    """
    In-memory adapters implement ports only; they know nothing about
    scheduling, tracking or the composition root.
    """
    (
        archrule("adapters_isolation")
        .match("expiry_hooks.adapters*")
        .should_not_import("expiry_hooks.scheduling*")
        .should_not_import("expiry_hooks.tracking*")
        .should_not_import("expiry_hooks.bootstrap*")
        .check("expiry_hooks")
    )


def test_redis_adapters_layering() -> None:
    """
    Redis adapters build on ports and primitives, never on the
    in-memory adapters or the services.
    """
    (
        archrule("redis_adapters_layering")
        .match("expiry_hooks_redis*")
        .should_not_import("expiry_hooks.adapters*")
        .should_not_import("expiry_hooks.scheduling*")
        .should_not_import("expiry_hooks.tracking*")
        .should_not_import("expiry_hooks.bootstrap*")
        .check("expiry_hooks_redis")
    )
