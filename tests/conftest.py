import pytest

from mortgage_sim.data_models import LoanConfig


@pytest.fixture
def base_config():
    """300k over 30 years: 5 years fixed at 4.5 %, then 6 % + 2.25 % TRE."""
    return LoanConfig(
        principal=300_000,
        term_months=360,
        fixed_months=60,
        fixed_apr=4.5,
        variable_base_apr=6,
        tre=2.25,
        monthly_extra=0,
    )
