"""
Submit a threat indicator through a proof, as a front-end would.
"""

import asyncio

from zkintel.workflow import GenerateWorkflow, SubmissionWorkflow


async def main():
    generated = await GenerateWorkflow().run("203.0.113.42")
    submission = await SubmissionWorkflow().submit(
        generated.commitment,
        generated.proof,
        indicator_type="ip",
        severity="high",
        tags=["botnet", "c2"],
    )
    assert submission.accepted
    return submission


asyncio.run(main())
