from tests.test_fixtures import (  # noqa: F401
    fake_clock,
    master,
    navigation_state,
    publisher,
    sample_links,
    translator,
)
