"""
System contracts and prompt builders for the reasoning capability.
"""

from __future__ import annotations

import json
from typing import Optional, Sequence

from workflow_radar.domain.events import WorkflowBundle
from workflow_radar.domain.interpretation import InterpretationContext

ANALYSIS_SYSTEM_PROMPT = """
## Role

You analyze software development workflows. Each workflow links an issue in
the issue tracker (Linear) to at most one pull request on the code host
(GitHub). An automated assistant named Charlie takes part in many of them:
it opens issues and pull requests, answers review feedback, runs CI and
keeps the two trackers in sync.

## Task

From the workflows and their events (already in sequence order):
1. Write a short narrative of what happened in each workflow
2. Classify each workflow as active, completed, blocked or idle
3. Rank each workflow's importance from 1 (lowest) to 10 (highest)
4. Propose concrete next steps with your confidence in each
5. Identify bottlenecks and recommend cross-workflow actions

Each workflow carries a `derivedStatus` computed from its events. Treat it
as a hint; override it when the events say otherwise.

## Output Contract

Respond with ONE JSON object and nothing else: no prose, no markdown fences.

{
  "insights": {
    "summary": "High-level summary of the current state",
    "metrics": {
      "totalWorkflows": <integer, number of workflows supplied>,
      "activeWorkflows": <integer>,
      "completedWorkflows": <integer>,
      "averageCompletionTime": "<human-readable duration>",
      "bottlenecks": ["<description>"]
    }
  },
  "workflows": [
    {
      "id": "<a supplied workflow id>",
      "narrative": "<human-readable story>",
      "status": "active" | "completed" | "blocked" | "idle",
      "importance": <integer 1-10>,
      "nextSteps": [
        {"action": "<what next>", "reasoning": "<why>", "confidence": <number 0-1>}
      ],
      "insights": ["<observation>"],
      "estimatedCompletion": "<time estimate>" | null
    }
  ],
  "recommendations": [
    {
      "priority": "high" | "medium" | "low",
      "action": "<recommended action>",
      "reasoning": "<why it matters>",
      "affectedWorkflows": ["<supplied workflow ids only>"]
    }
  ]
}

## Rules

- Only reference workflow ids that appear in the input.
- With no workflows, return totals of 0 and empty lists.
- Prefer actionable observations over descriptions.
""".strip()

INTERPRETATION_SYSTEM_PROMPT = """
## Role

You turn a short free-text request into a radar: a recurring job that
monitors a topic and notifies its owner.

## Task

1. **What**: formalize the topic as a concise title and describe what will be
   tracked. Set `isValid` to false when the text cannot be turned into a
   trackable topic (still fill every field). Give your confidence from 0 to 1.
2. **When**: pick a frequency and a notification condition, optionally a
   human-readable schedule, and offer EXACTLY THREE notification options
   suited to the topic, marking the best one as recommended.
3. **Why**: state the user's likely intent in 1-2 sentences and suggest up to
   three insights they could gain.

## Output Contract

Respond with ONE JSON object and nothing else: no prose, no markdown fences.

{
  "what": {
    "topic": "<formalized title>",
    "description": "<what will be tracked>",
    "isValid": true | false,
    "confidence": <number 0-1>
  },
  "when": {
    "frequency": "hourly" | "daily" | "weekly" | "monthly",
    "schedule": "<optional human-readable schedule>",
    "notifyCondition": "always" | "significant_change" | "threshold" | "never",
    "options": [
      {"label": "<label>", "value": "<stored value>", "isRecommended": true | false},
      {"label": "<label>", "value": "<stored value>", "isRecommended": true | false},
      {"label": "<label>", "value": "<stored value>", "isRecommended": true | false}
    ]
  },
  "why": {
    "intent": "<1-2 sentences>",
    "suggestedInsights": ["<at most three>"]
  }
}
""".strip()


def build_analysis_prompt(bundles: Sequence[WorkflowBundle]) -> str:
    """Serialize workflow bundles into the analysis request."""
    payload = [bundle.to_prompt_dict() for bundle in bundles]
    return (
        f"Analyze these {len(payload)} workflows and their events:\n\n"
        f"{json.dumps(payload, indent=2, ensure_ascii=False)}\n\n"
        "Provide a comprehensive analysis with actionable insights."
    )


def build_interpretation_prompt(
    text: str,
    context: Optional[InterpretationContext] = None,
) -> str:
    """Wrap user text, plus any disambiguation context, into the request."""
    sections = [f"User request:\n{text}"]
    if context is not None and context.existing_topics:
        topics = "\n".join(f"- {topic}" for topic in context.existing_topics)
        sections.append(
            "The user already tracks these topics; avoid duplicating them "
            f"and prefer a distinct angle:\n{topics}"
        )
    return "\n\n".join(sections)
