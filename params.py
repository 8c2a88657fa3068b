import os


class Params:
    # Ages
    min_start_age = 15
    retirement_age = 60

    # Matching tiers: (age_from, age_to_exclusive, matching_rate)
    matching_tiers = (
        (15, 30, 0.5),
        (30, 50, 0.8),
        (50, 60, 1.0),
    )

    # Government match ceiling per simulated year
    max_govt_contribution_year = 1800

    # Payout
    payout_years = 20
    months_per_year = 12

    # Returns (percent per year)
    default_annual_return_rate = 2.5
    max_annual_return_rate = 10.0

    # Input bounds for the savings slider (30,000 per year)
    max_monthly_savings = 2500

    # Display only, the engine never applies it
    minimum_guaranteed_pension = 600

    # Defaults offered when no preferences are saved yet
    default_start_age = 30
    default_monthly_savings = 100

    preferences_file = os.path.join(
        os.path.expanduser("~"), ".nsf_projection", "preferences.json"
    )

    @property
    def payout_months(self) -> int:
        return self.payout_years * self.months_per_year
