"""
Recurring agreements example.

Lists the recurring agreements of a merchant and the charges of each active
agreement, against the Vipps test environment.

Setup:
    pip install vipps-sdk

Usage:
    export VIPPS_CLIENT_ID="..."
    export VIPPS_CLIENT_SECRET="..."
    export VIPPS_SUBSCRIPTION_KEY="..."
    python list_agreements.py
"""

import asyncio

from vipps_sdk import (
    ApiClient,
    ClientConfig,
    ConfigError,
    StdOutLogger,
    UnexpectedResponseError,
)
from vipps_sdk.recurring import AgreementStatus, RecurringClient, RecurringError


async def main():
    try:
        config = ClientConfig.from_env(logger=StdOutLogger())
    except ConfigError as e:
        print(f"Configuration error: {e}")
        return

    async with ApiClient.from_config(config) as api:
        recurring = RecurringClient(api)
        try:
            agreements = await recurring.list_agreements()
        except RecurringError as e:
            for problem in e:
                print(f"{problem.field}: {problem.message} ({problem.code})")
            return
        except UnexpectedResponseError as e:
            print(f"Vipps answered {e.status}: {e.body!r}")
            return

        for agreement in agreements:
            price = agreement.price / 100
            print(
                f"{agreement.id} {agreement.status.value:<8} "
                f"{agreement.product_name} {price:.2f} {agreement.currency}"
            )
            if agreement.status is not AgreementStatus.ACTIVE:
                continue
            for charge in await recurring.list_charges(agreement.id):
                print(f"    {charge.due} {charge.status.value:<10} {charge.amount / 100:.2f}")


if __name__ == "__main__":
    asyncio.run(main())
