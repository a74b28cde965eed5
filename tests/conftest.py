#
# Pytest Fixtures
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from objectprinter.config import PrintingConfig
from objectprinter.members import clear_cache
from objectprinter.printer import ObjectPrinter


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def fresh_member_cache():
    """Drop cached member lists so classes redefined across tests are introspected again."""
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def lf_config() -> PrintingConfig:
    """Configuration with a fixed '\\n' terminator for exact output comparisons."""
    return PrintingConfig(newline="\n")


@pytest.fixture
def lf_printer(lf_config) -> ObjectPrinter:
    return ObjectPrinter(lf_config)
