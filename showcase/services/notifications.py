# showcase/services/notifications.py
"""
Outbound notifications: SMTP email through Flask-Mail and JSON webhooks to
Slack, Discord and the kitchen display.

Every channel is best-effort. Failures are logged and never reach the caller,
so a notification problem cannot fail the write that triggered it.
"""

import logging
import threading

import requests
from flask import current_app
from flask_mail import Message

from showcase.extensions import mail
from showcase.services.email_templates import EmailTemplates

logger = logging.getLogger(__name__)


def _money(cents):
    return f"${(cents or 0) / 100:.2f}"


class NotificationService:
    """Handle all notification logic"""

    @staticmethod
    def dispatch(func, *args, **kwargs):
        """
        Run ``func`` off the request thread with the app context pushed, or
        inline when NOTIFICATIONS_ASYNC is off. Arguments must be plain data,
        not ORM instances bound to the request's session.
        """
        app = current_app._get_current_object()

        def run():
            with app.app_context():
                try:
                    func(*args, **kwargs)
                except Exception:
                    logger.exception(f"Notification {func.__name__} failed")

        if app.config.get("NOTIFICATIONS_ASYNC", True):
            thread = threading.Thread(target=run, name=f"notify-{func.__name__}")
            thread.daemon = True
            thread.start()
        else:
            run()

    @staticmethod
    def send_email(to_email, subject, text, html=None):
        if not to_email:
            return False
        try:
            msg = Message(
                subject=subject,
                recipients=[to_email],
                body=text,
                html=html,
                sender=current_app.config.get("MAIL_DEFAULT_SENDER"),
            )
            mail.send(msg)
            logger.info(f"Email sent to {to_email}: {subject}")
            return True
        except Exception as e:
            logger.error(f"Failed to send email to {to_email}: {str(e)}")
            return False

    @staticmethod
    def post_webhook(url, payload, channel):
        if not url:
            logger.debug(f"{channel} webhook not configured, skipping")
            return False
        try:
            response = requests.post(
                url,
                json=payload,
                timeout=current_app.config.get("WEBHOOK_TIMEOUT_SECONDS", 5),
            )
            response.raise_for_status()
            return True
        except requests.RequestException as e:
            logger.error(f"{channel} webhook failed: {str(e)}")
            return False

    @classmethod
    def send_slack(cls, text, fields=None):
        payload = {"text": text}
        if fields:
            payload["blocks"] = [
                {"type": "section", "text": {"type": "mrkdwn", "text": f"*{text}*"}},
                {
                    "type": "section",
                    "fields": [
                        {"type": "mrkdwn", "text": f"*{name}:*\n{value}"}
                        for name, value in fields.items()
                    ],
                },
            ]
        return cls.post_webhook(current_app.config.get("SLACK_WEBHOOK_URL"), payload, "Slack")

    @classmethod
    def send_discord(cls, title, fields=None):
        embed = {"title": title, "color": 0x4F46E5}
        if fields:
            embed["fields"] = [
                {"name": name, "value": str(value), "inline": True}
                for name, value in fields.items()
            ]
        payload = {"content": title, "embeds": [embed]}
        return cls.post_webhook(current_app.config.get("DISCORD_WEBHOOK_URL"), payload, "Discord")

    @classmethod
    def send_to_kitchen(cls, payload):
        return cls.post_webhook(current_app.config.get("KITCHEN_WEBHOOK_URL"), payload, "Kitchen")

    # Domain notifications. Each takes plain dicts and is safe to dispatch.

    @classmethod
    def notify_new_intake(cls, intake):
        config = current_app.config
        subject, text, html = EmailTemplates.intake_team_notification(intake, config.get("APP_URL"))
        cls.send_email(config.get("TEAM_EMAIL"), subject, text, html)

        subject, text, html = EmailTemplates.intake_client_confirmation(intake["fullName"], intake["id"])
        cls.send_email(intake["email"], subject, text, html)

        fields = cls._intake_fields(intake)
        cls.send_slack(f"New project intake from {intake['company']}", fields)
        cls.send_discord(f"New project intake from {intake['company']}", fields)

    @classmethod
    def notify_new_lead(cls, lead):
        fields = cls._intake_fields(lead)
        cls.send_slack(f"New B2B lead from {lead['company']}", fields)
        cls.send_discord(f"New B2B lead from {lead['company']}", fields)

    @classmethod
    def notify_new_order(cls, order):
        subject, text, html = EmailTemplates.new_order(order)
        cls.send_email(current_app.config.get("KITCHEN_EMAIL"), subject, text, html)
        cls.send_to_kitchen({"type": "new_order", "order": order})
        fields = {
            "Customer": order["customerName"],
            "Phone": order["customerPhone"],
            "Items": order["itemCount"],
            "Total": _money(order["totalCents"]),
            "Pickup": order["pickupAt"],
        }
        cls.send_slack(f"New order #{order['id'][:8]}", fields)
        cls.send_discord(f"New order #{order['id'][:8]}", fields)

    @classmethod
    def notify_checkout_completed(cls, session_id, customer_email, order_summary, timestamp):
        if customer_email:
            subject, text, html = EmailTemplates.checkout_customer_confirmation(order_summary)
            cls.send_email(customer_email, subject, text, html)

        subject, text, html = EmailTemplates.checkout_kitchen_notification(order_summary)
        cls.send_email(current_app.config.get("KITCHEN_EMAIL"), subject, text, html)

        cls.send_to_kitchen({
            "order": order_summary,
            "timestamp": timestamp,
            "sessionId": session_id,
        })

    @classmethod
    def notify_webhook_failure(cls, error, event_type):
        cls.send_to_kitchen({
            "level": "error",
            "message": "Stripe webhook processing failed",
            "error": error,
            "eventType": event_type,
        })
        admin_email = current_app.config.get("ADMIN_EMAIL")
        if admin_email:
            subject, text, html = EmailTemplates.webhook_failure_alert(error, event_type)
            cls.send_email(admin_email, subject, text, html)

    @classmethod
    def notify_trial_started(cls, email, name, plan="Pro", trial_days=14):
        subject, text, html = EmailTemplates.trial_started(name, plan, trial_days, current_app.config.get("APP_URL"))
        cls.send_email(email, subject, text, html)

    @classmethod
    def notify_subscription_active(cls, email, name, plan, next_billing_date):
        subject, text, html = EmailTemplates.subscription_active(name, plan, next_billing_date)
        cls.send_email(email, subject, text, html)

    @classmethod
    def notify_subscription_cancelled(cls, email, name, plan):
        subject, text, html = EmailTemplates.subscription_cancelled(name, plan)
        cls.send_email(email, subject, text, html)

    @staticmethod
    def _intake_fields(intake):
        fields = {
            "Name": intake["fullName"],
            "Email": intake["email"],
            "Company": intake["company"],
            "Type": intake.get("projectType"),
        }
        if intake.get("budget"):
            fields["Budget"] = intake["budget"]
        if intake.get("timeline"):
            fields["Timeline"] = intake["timeline"]
        return fields
