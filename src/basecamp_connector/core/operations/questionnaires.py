from __future__ import annotations

from basecamp_connector.core.context import HostContext
from basecamp_connector.core.dispatch import Operation, Resource, handler
from basecamp_connector.core.operations._common import api_get, list_items, param


@handler(Resource.QUESTION, Operation.GET)
async def get_question(ctx: HostContext, i: int):
    project_id = param(ctx, i, "projectId")
    question_id = param(ctx, i, "questionId")
    return await api_get(ctx, f"/buckets/{project_id}/questions/{question_id}.json")


@handler(Resource.QUESTION, Operation.GET_ALL)
async def list_questions(ctx: HostContext, i: int):
    project_id = param(ctx, i, "projectId")
    questionnaire_id = param(ctx, i, "questionnaireId")
    return await list_items(
        ctx,
        i,
        f"/buckets/{project_id}/questionnaires/{questionnaire_id}/questions.json",
    )


@handler(Resource.QUESTION_ANSWER, Operation.GET_ALL)
async def list_question_answers(ctx: HostContext, i: int):
    project_id = param(ctx, i, "projectId")
    question_id = param(ctx, i, "questionId")
    return await list_items(
        ctx, i, f"/buckets/{project_id}/questions/{question_id}/answers.json"
    )
