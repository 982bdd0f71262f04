from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # App
    debug: bool = False
    log_level: str = "INFO"

    # IRR solver (Newton-Raphson)
    irr_initial_guess: float = 0.10
    irr_max_iterations: int = 100
    irr_tolerance: float = 1e-4
    irr_min_rate: float = -0.99  # -99%
    irr_max_rate: float = 10.0  # 1000%

    # Goal-seek: fixed iteration count, no early exit
    bisection_iterations: int = 50

    # Reporting
    npv_discount_rate: float = 10.0  # Percent

    # Deal defaults (percent / years)
    default_strategy: str = "value_add"
    default_holding_period: int = 5
    default_exit_cap_rate: float = 6.0
    default_selling_costs_pct: float = 2.0

    # Sensitivity grids
    sensitivity_exit_caps: list[float] = [5.0, 5.5, 6.0, 6.5, 7.0, 7.5, 8.0]
    sensitivity_growth_rates: list[float] = [1.0, 2.0, 3.0, 4.0, 5.0]
    matrix_exit_caps: list[float] = [5.5, 6.0, 6.5, 7.0, 7.5]
    matrix_growth_rates: list[float] = [2.0, 2.5, 3.0, 3.5, 4.0]


settings = Settings()
