import asyncio

import pytest

from zkintel.exceptions import WorkflowBusyError
from zkintel.verifier import FormatVerifier, KnowledgeVerifier
from zkintel.workflow import (
    GenerateWorkflow,
    SubmissionWorkflow,
    VerificationResult,
    VerifyWorkflow,
    WorkflowState,
    judge,
)


def run(coro):
    return asyncio.run(coro)


def test_generate_workflow_states():
    workflow = GenerateWorkflow()
    assert workflow.state is WorkflowState.IDLE
    result = run(workflow.run("malicious.example.org"))
    assert workflow.state is WorkflowState.SETTLED
    assert workflow.result == result
    assert result.proof.startswith("zkp_")


@pytest.mark.parametrize("secret", ["", "   ", None])
def test_generate_workflow_refuses_blank(secret):
    workflow = GenerateWorkflow()
    assert run(workflow.run(secret)) is None
    assert workflow.state is WorkflowState.IDLE


def test_generate_workflow_is_single_flight():
    workflow = GenerateWorkflow(delay=0.05)

    async def twice():
        first = asyncio.ensure_future(workflow.run("ioc"))
        await asyncio.sleep(0)
        assert workflow.busy
        with pytest.raises(WorkflowBusyError):
            await workflow.run("ioc")
        return await first

    assert run(twice()) is not None
    assert workflow.state is WorkflowState.SETTLED


def test_workflow_can_run_again_after_settling():
    workflow = GenerateWorkflow()
    first = run(workflow.run("ioc"))
    second = run(workflow.run("ioc"))
    assert first.commitment != second.commitment
    workflow.reset()
    assert workflow.state is WorkflowState.IDLE
    assert workflow.result is None


def test_verify_workflow_valid():
    generated = run(GenerateWorkflow().run("ioc"))
    workflow = VerifyWorkflow()
    result = run(workflow.run(generated.commitment, generated.proof))
    assert result == VerificationResult(True)
    assert result
    assert workflow.state is WorkflowState.SETTLED


@pytest.mark.parametrize(
    "commitment,proof,reason",
    [
        ("c0ffee", "zkp_deadbeef_abcd", "mismatch"),
        ("c0ffee", "zkp_x_y", "malformed"),
    ],
)
def test_verify_workflow_rejections(commitment, proof, reason):
    result = run(VerifyWorkflow().run(commitment, proof))
    assert not result
    assert result.reason == reason


def test_verify_workflow_format_verifier():
    result = run(
        VerifyWorkflow(verifier=FormatVerifier()).run("c0ffee", "zkp_deadbeef_abcd")
    )
    assert result.valid


def test_verify_workflow_format_verifier_rejects():
    result = run(VerifyWorkflow(verifier=FormatVerifier()).run("c0ffee", "deadbeef"))
    assert result == VerificationResult(False, "rejected")


@pytest.mark.parametrize("commitment,proof", [("", "zkp_x_y"), ("c", ""), ("c", None)])
def test_verify_workflow_refuses_blank(commitment, proof):
    workflow = VerifyWorkflow()
    assert run(workflow.run(commitment, proof)) is None
    assert workflow.state is WorkflowState.IDLE


def test_verify_workflow_knowledge(params):
    generated = run(
        GenerateWorkflow(scheme="pedersen", prove_knowledge=True).run("203.0.113.42")
    )
    workflow = VerifyWorkflow(verifier=KnowledgeVerifier(params))
    result = run(
        workflow.run(
            generated.commitment, generated.proof, knowledge=generated.knowledge
        )
    )
    assert result.valid


def test_verify_workflow_knowledge_statement_mismatch(params):
    generate = GenerateWorkflow(scheme="pedersen", prove_knowledge=True)
    first = run(generate.run("first"))
    second = run(generate.run("second"))
    result = run(
        VerifyWorkflow(verifier=KnowledgeVerifier(params)).run(
            second.commitment, second.proof, knowledge=first.knowledge
        )
    )
    assert result == VerificationResult(False, "statement_mismatch")


def test_judge_blank():
    assert judge("", "zkp_x_y") is None


def test_submission_accepted():
    generated = run(GenerateWorkflow().run("203.0.113.42"))
    submission = run(
        SubmissionWorkflow().submit(
            generated.commitment,
            generated.proof,
            indicator_type="ip",
            severity="critical",
            tags=["c2"],
            description="Command and control server",
        )
    )
    assert submission.accepted
    assert submission.reason is None
    assert submission.indicator_type == "ip"
    assert submission.severity == "critical"
    assert submission.tags == ("c2",)


def test_submission_defaults():
    generated = run(GenerateWorkflow().run("ioc"))
    submission = run(SubmissionWorkflow().submit(generated.commitment, generated.proof))
    assert submission.indicator_type == "hash"
    assert submission.severity == "medium"


def test_submission_rejected_on_mismatch():
    submission = run(SubmissionWorkflow().submit("c0ffee", "zkp_deadbeef_abcd"))
    assert not submission.accepted
    assert submission.reason == "mismatch"


def test_submission_refuses_blank():
    assert run(SubmissionWorkflow().submit("", "zkp_deadbeef_abcd")) is None


@pytest.mark.parametrize(
    "kwargs", [{"indicator_type": "email"}, {"severity": "urgent"}]
)
def test_submission_rejects_unknown_fields(kwargs):
    with pytest.raises(ValueError):
        run(SubmissionWorkflow().submit("c0ffee", "zkp_c0ffee_abcd", **kwargs))


def test_judge_undecodable_knowledge(params):
    generated = run(GenerateWorkflow(scheme="pedersen").run("203.0.113.42"))
    result = judge(
        generated.commitment,
        generated.proof,
        verifier=KnowledgeVerifier(params),
        knowledge=b"garbage",
    )
    assert result == VerificationResult(False, "malformed")


def test_submission_without_knowledge_is_rejected(params):
    generated = run(GenerateWorkflow(scheme="pedersen").run("203.0.113.42"))
    workflow = SubmissionWorkflow(verifier=KnowledgeVerifier(params))
    submission = run(workflow.submit(generated.commitment, generated.proof))
    assert not submission.accepted
    assert submission.reason == "malformed"
    assert workflow.state is WorkflowState.SETTLED
