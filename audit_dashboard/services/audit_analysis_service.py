"""
Audit Analysis Service.

Builds prompts from audit logs and turns LLM output into the executive
summary, the insights list and chat answers. Every failure is converted into
a user-facing string here; nothing raised by a provider reaches the caller.
"""

from __future__ import annotations

import json
import re
from collections import Counter
from datetime import datetime, timedelta
from typing import Any, Callable, Optional, Sequence

from audit_dashboard.core.exceptions import NoContentError
from audit_dashboard.core.logger import setup_logger
from audit_dashboard.interfaces.llm_provider import ILLMProvider
from audit_dashboard.models.audit_log import AuditLog
from audit_dashboard.models.enums import MessageRole
from audit_dashboard.models.llm import GenerateOptions, Message
from audit_dashboard.models.session import LLMConfig
from audit_dashboard.services.provider_router import get_provider
from audit_dashboard.utils.datetime_utils import ensure_utc, format_report_date, now_utc

logger = setup_logger(__name__)

NO_RECENT_LOGS_MESSAGE = (
    "No recent audit logs found in the last 24 hours. "
    "Please check if your Snyk organization has recent activity."
)
CHAT_FALLBACK_MESSAGE = "I apologize, but I couldn't process your request at this time."

SUMMARY_WINDOW = timedelta(hours=24)
SUMMARY_MAX_LOGS = 200
INSIGHTS_MAX_LOGS = 100
CHAT_CONTEXT_LOGS = 50
TOP_EVENT_COUNT = 5

SUMMARY_OPTIONS = GenerateOptions(max_output_tokens=4096, temperature=0.1, top_p=0.9, top_k=40)

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


def _log_digest(logs: Sequence[AuditLog]) -> list[dict[str, Any]]:
    return [
        {
            "event": log.event,
            "created": ensure_utc(log.created).isoformat(),
            "content": log.content,
        }
        for log in logs
    ]


def _actor(log: AuditLog) -> str:
    content = log.content or {}
    return str(content.get("user_email") or content.get("user_id") or "Unknown")


class AuditAnalysisService:
    """Service for LLM-backed analysis of audit logs."""

    def __init__(
        self,
        provider_resolver: Callable[[Optional[LLMConfig]], ILLMProvider] = get_provider,
        clock: Callable[[], datetime] = now_utc,
    ):
        """
        Initialize Audit Analysis Service.

        Args:
            provider_resolver: Maps an LLM config to a provider (the router by default)
            clock: Returns the current UTC time
        """
        self._resolve_provider = provider_resolver
        self._clock = clock

    # ------------------------------------------------------------------
    # Executive summary
    # ------------------------------------------------------------------

    async def generate_executive_summary(
        self,
        logs: Sequence[AuditLog],
        llm_config: Optional[LLMConfig],
    ) -> str:
        """
        Produce a Markdown executive report for the last 24 hours.

        Returns a fixed message without calling any provider when no log
        falls inside the window.
        """
        try:
            now = self._clock()
            cutoff = now - SUMMARY_WINDOW
            recent = [log for log in logs if ensure_utc(log.created) >= cutoff]
            if not recent:
                return NO_RECENT_LOGS_MESSAGE

            sample = recent[:SUMMARY_MAX_LOGS]
            histogram = Counter(log.event for log in sample)
            unique_users = len({_actor(log) for log in sample})
            top_events = ", ".join(
                f"{event}: {count}" for event, count in histogram.most_common(TOP_EVENT_COUNT)
            )

            prompt = self._build_summary_prompt(
                report_date=format_report_date(now),
                event_count=len(sample),
                unique_users=unique_users,
                top_events=top_events,
            )
            provider = self._resolve_provider(llm_config)
            logger.info(f"Generating executive summary with {provider.get_model_name()}")
            return await provider.generate(
                [Message(role=MessageRole.USER, content=prompt)],
                SUMMARY_OPTIONS,
            )
        except Exception as e:
            logger.error(f"Executive summary error: {e}")
            return f"Summary generation error: {self._error_text(e)}"

    @staticmethod
    def _build_summary_prompt(
        report_date: str,
        event_count: int,
        unique_users: int,
        top_events: str,
    ) -> str:
        return f"""Create a comprehensive executive security summary for Snyk audit events from the last 24 hours.

IMPORTANT: Today's date is {report_date}. Use it as the report date and reference timeframe.

Event Data: {event_count} events, {unique_users} users
Top Events: {top_events}

Write a detailed executive report with these sections:

## Executive Security Summary

### 🔍 Activity Overview
Assess security activity and operational posture over the last 24 hours. Mention the report date ({report_date}).

### 🚨 Critical Events
Analyze the most frequent and most impactful events, with specifics for each event type.

### ⚠️ Risk Analysis
Evaluate security concerns, threat patterns and vulnerability implications of the logged activity.

### 👥 User Activity Insights
Describe user behavior patterns, access trends and any anomalies.

### 📋 Recommendations
Give prioritized, actionable steps for leadership labelled High/Medium/Low with their business impact.

### 📊 Key Metrics & Trends
Present event frequencies, user engagement and security posture indicators.

Use proper Markdown formatting (headers, bullet points, bold text) and complete every section."""

    # ------------------------------------------------------------------
    # Insights
    # ------------------------------------------------------------------

    async def extract_insights(
        self,
        logs: Sequence[AuditLog],
        llm_config: Optional[LLMConfig],
    ) -> list[str]:
        """Ask the model for a JSON array of short security insights."""
        try:
            digest = _log_digest(logs[:INSIGHTS_MAX_LOGS])
            prompt = f"""Analyze these Snyk audit logs and provide security insights:

{json.dumps(digest, indent=2, default=str)}

Cover:
1. Key security events summary
2. Risk patterns or anomalies
3. Recommendations for improvement
4. Overall security posture assessment

Format the answer as a JSON array of string insights."""

            provider = self._resolve_provider(llm_config)
            raw = await provider.generate([Message(role=MessageRole.USER, content=prompt)])
            return self.parse_insights(raw)
        except Exception as e:
            logger.error(f"Insight extraction error: {e}")
            return [f"Analysis error: {self._error_text(e)}"]

    @staticmethod
    def parse_insights(raw: str) -> list[str]:
        """
        Parse model output into a list of insights.

        A JSON array becomes a list of strings (non-string items are rendered
        as JSON). Anything else is returned whole as a single insight.
        """
        text = raw.strip()
        fenced = _CODE_FENCE.match(text)
        if fenced:
            text = fenced.group(1)

        try:
            parsed = json.loads(text)
        except (ValueError, TypeError):
            return [raw]

        if not isinstance(parsed, list):
            return [raw]
        return [item if isinstance(item, str) else json.dumps(item) for item in parsed]

    # ------------------------------------------------------------------
    # Chat
    # ------------------------------------------------------------------

    async def chat(
        self,
        message: str,
        logs: Sequence[AuditLog],
        history: Sequence[Message],
        llm_config: Optional[LLMConfig],
    ) -> str:
        """Answer a user question grounded on the most recent audit logs."""
        try:
            context = json.dumps(_log_digest(logs[:CHAT_CONTEXT_LOGS]), indent=2, default=str)
            system_prompt = f"""You are a security analyst assistant for Snyk audit logs.
You have access to recent audit log data and help users understand security events,
identify patterns and act on recommendations.

Recent audit logs context:
{context}

IMPORTANT: Respond in PLAIN TEXT format only. Do not use Markdown such as **bold**, *italics*, # headers, - bullet points or ## headings. Use simple text with line breaks for readability.

Give helpful, security-focused answers based on the audit log data, in plain text only."""

            conversation = [Message(role=MessageRole.SYSTEM, content=system_prompt)]
            conversation.extend(m for m in history if m.role != MessageRole.SYSTEM)
            conversation.append(Message(role=MessageRole.USER, content=message))

            provider = self._resolve_provider(llm_config)
            answer = await provider.generate(conversation)
            return answer or CHAT_FALLBACK_MESSAGE
        except NoContentError:
            return CHAT_FALLBACK_MESSAGE
        except Exception as e:
            logger.error(f"Chat error: {e}")
            return f"I encountered an error: {self._error_text(e)}. Please try again."

    @staticmethod
    def _error_text(error: Exception) -> str:
        return getattr(error, "message", None) or str(error) or type(error).__name__
