import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from travloger.core.config import settings
from travloger.core.exceptions import LeadNotFoundError, ValidationError
from travloger.repositories.interfaces import AuditLogStore, LeadStore
from travloger.schemas.common import LeadPriority

logger = logging.getLogger(__name__)


class AutomationDispatcher:
    """Turn a lead's priority tier into its follow-up actions.

    Each tier maps to a fixed, ordered list of actions:

        - ``Hot``   instant WhatsApp, email quote summary, consultant
                    notification, follow-up task due now
        - ``Warm``  WhatsApp reminder and follow-up task, both scheduled
                    ``AUTOMATION_REMINDER_DELAY_HOURS`` out
        - ``Cold``  low-priority view, nurture campaign, monthly broadcast

    Nothing is sent from here: every action is recorded in the
    ``automation_log`` audit table for the messaging workers to pick up.
    An unknown tier yields no actions.
    """

    def __init__(self, lead_store: LeadStore, audit_log: AuditLogStore) -> None:
        self._lead_store = lead_store
        self._audit_log = audit_log

    async def dispatch(
        self,
        lead_id: Optional[int],
        priority: Optional[str],
        score: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        if not lead_id or not priority:
            raise ValidationError("lead_id and priority are required")

        lead = await self._lead_store.get_fields(lead_id)
        if lead is None:
            raise LeadNotFoundError(f"Lead {lead_id} not found")

        if now is None:
            now = datetime.now(timezone.utc)

        if priority == LeadPriority.HOT.value:
            entries = self._hot_actions(lead, now)
        elif priority == LeadPriority.WARM.value:
            entries = self._warm_actions(now)
        elif priority == LeadPriority.COLD.value:
            entries = self._cold_actions()
        else:
            logger.info("No automation defined for priority %r", priority)
            entries = []

        await self._record(lead_id, entries)

        return {
            "lead_id": lead_id,
            "lead_name": lead.get("name"),
            "priority": priority,
            "score": score,
            "actions_triggered": [entry["key"] for entry in entries],
            "automation_log": [
                {
                    "action": entry["action"],
                    "status": entry["status"],
                    "message": entry["message"],
                    "priority": entry["priority"],
                    "details": entry["details"],
                }
                for entry in entries
            ],
            "message": (
                f"{len(entries)} automation actions triggered for {priority} lead"
            ),
        }

    async def get_log(self, lead_id: Optional[int]) -> List[Any]:
        if not lead_id:
            raise ValidationError("lead_id is required")
        return await self._audit_log.list_for_lead(
            lead_id, limit=settings.AUTOMATION_LOG_LIMIT
        )

    async def _record(self, lead_id: int, entries: List[Dict[str, Any]]) -> None:
        """Append *entries* to the audit log.

        Best-effort: a failed write is logged and rolled back, and the
        dispatch still succeeds.
        """
        if not entries:
            return
        try:
            for entry in entries:
                await self._audit_log.append(
                    lead_id=lead_id,
                    action_type=entry["action"],
                    status=entry["status"],
                    message=entry["message"],
                    priority=entry["priority"],
                    metadata_={
                        "action": entry["action"],
                        "status": entry["status"],
                        "message": entry["message"],
                        "priority": entry["priority"],
                        **entry["details"],
                    },
                )
            await self._audit_log.commit()
        except Exception:
            logger.warning(
                "Failed to write automation log for lead %s", lead_id, exc_info=True
            )
            try:
                await self._audit_log.rollback()
            except Exception:
                logger.warning("Rollback after automation log failure also failed")

    # ------------------------------------------------------------------
    # Tier action lists
    # ------------------------------------------------------------------

    @staticmethod
    def _entry(
        key: str,
        action: str,
        status: str,
        message: str,
        priority: str,
        **details: Any,
    ) -> Dict[str, Any]:
        return {
            "key": key,
            "action": action,
            "status": status,
            "message": message,
            "priority": priority,
            "details": details,
        }

    def _hot_actions(self, lead: Dict[str, Any], now: datetime) -> List[Dict[str, Any]]:
        return [
            self._entry(
                "send_whatsapp_instant",
                "WhatsApp Instant Message",
                "queued",
                "Sending instant WhatsApp welcome message",
                "high",
                lead_name=lead.get("name"),
                lead_phone=lead.get("phone"),
            ),
            self._entry(
                "send_email_quote_summary",
                "Email Quote Summary",
                "queued",
                "Sending email quote summary",
                "high",
                lead_email=lead.get("email"),
            ),
            self._entry(
                "notify_assigned_consultant",
                "Notify Consultant",
                "queued",
                "Notifying assigned consultant for same-day follow-up",
                "urgent",
                assigned_to=lead.get("assigned_employee_name") or "Unassigned",
                lead_type=lead.get("lead_type") or settings.DEFAULT_LEAD_TYPE,
            ),
            self._entry(
                "create_task_immediate",
                "Create Immediate Task",
                "queued",
                "Creating follow-up task for today",
                "medium",
                due_date=now.isoformat(),
            ),
        ]

    def _warm_actions(self, now: datetime) -> List[Dict[str, Any]]:
        reminder_at = now + timedelta(hours=settings.AUTOMATION_REMINDER_DELAY_HOURS)
        return [
            self._entry(
                "schedule_whatsapp_reminder",
                "Schedule WhatsApp Reminder",
                "scheduled",
                "WhatsApp reminder scheduled",
                "medium",
                scheduled_for=reminder_at.isoformat(),
            ),
            self._entry(
                "schedule_task_24_48h",
                "Schedule Follow-Up Task",
                "scheduled",
                "Follow-up task scheduled for 24-48 hours",
                "medium",
                due_date=reminder_at.isoformat(),
            ),
        ]

    def _cold_actions(self) -> List[Dict[str, Any]]:
        return [
            self._entry(
                "move_to_low_priority",
                "Move to Low Priority View",
                "completed",
                "Lead moved to low priority view",
                "low",
            ),
            self._entry(
                "add_to_nurture_campaign",
                "Add to Nurture Campaign",
                "queued",
                "Adding to slow nurture email campaign",
                "low",
                campaign_type="monthly_broadcast",
            ),
            self._entry(
                "add_to_broadcast_list",
                "Add to Monthly Broadcast",
                "queued",
                "Added to monthly broadcast list",
                "low",
            ),
        ]
