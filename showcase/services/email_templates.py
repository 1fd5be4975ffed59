# showcase/services/email_templates.py
from datetime import datetime


def _money(cents):
    return f"${(cents or 0) / 100:.2f}"


def _html_wrapper(title, body_html, accent="#4f46e5"):
    return f"""
        <!DOCTYPE html>
        <html>
        <head>
            <style>
                body {{ font-family: Arial, sans-serif; line-height: 1.6; }}
                .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
                .header {{ background: {accent}; color: white; padding: 20px; text-align: center; }}
                .content {{ padding: 30px; background: #f8f9fa; }}
                .footer {{ margin-top: 30px; padding-top: 20px; border-top: 1px solid #dee2e6; color: #6c757d; }}
            </style>
        </head>
        <body>
            <div class="container">
                <div class="header"><h1>{title}</h1></div>
                <div class="content">{body_html}</div>
                <div class="footer">
                    <p>&copy; {datetime.now().year} Showcase. All rights reserved.</p>
                </div>
            </div>
        </body>
        </html>
        """


class EmailTemplates:
    """Email template definitions. Each returns ``(subject, text, html)``."""

    @staticmethod
    def intake_team_notification(intake, app_url):
        subject = f"New Intake: {intake['company']} - {intake.get('budget') or 'n/a'}"
        features = ", ".join(intake.get("features") or []) or "None specified"
        files = "\n".join(intake.get("uploadedFiles") or []) or "No files uploaded"
        text = f"""New Client Intake Form Submitted!

Client Information:
- Name: {intake['fullName']}
- Email: {intake['email']}
- Phone: {intake.get('phone') or 'Not provided'}
- Company: {intake['company']}

Project Details:
- Type: {intake['projectType']}
- Budget: {intake.get('budget')}
- Timeline: {intake.get('timeline')}
- Launch Date: {intake.get('launchDate') or 'Not specified'}

Preferred Kickoff Call:
- Date: {intake.get('preferredCallDate') or 'Not specified'}
- Time: {intake.get('preferredCallTime') or 'Not specified'}

Description:
{intake.get('projectDescription') or ''}

Goals:
{intake.get('goals') or ''}

Features Requested:
{features}

Uploaded Files:
{files}

View full details: {app_url}/admin/intakes/{intake['id']}"""
        return subject, text, None

    @staticmethod
    def intake_client_confirmation(full_name, intake_id):
        subject = "We received your project inquiry"
        text = f"""Hi {full_name},

Thank you for submitting your project inquiry! We're excited to learn more about your project.

Here's what happens next:

1. Our team will review your submission within 24 hours
2. You'll receive a confirmation email with your kickoff call details
3. We'll prepare a custom proposal based on your requirements
4. After our call, you'll receive a detailed project timeline and scope

Your Reference ID: {intake_id}

Best regards,
The Showcase Team"""
        return subject, text, None

    @staticmethod
    def new_order(order):
        subject = f"New Order #{order['id'][:8]} - {_money(order['totalCents'])}"
        text = f"""New order received:

Customer: {order['customerName']}
Phone: {order['customerPhone']}
Items: {order['itemCount']}
Total: {_money(order['totalCents'])}
Pickup: {order['pickupAt']}"""
        return subject, text, None

    @staticmethod
    def checkout_customer_confirmation(order_summary):
        subject = "Your Order Confirmation"
        text = f"Thanks for your order!\n\nYou ordered:\n{order_summary}\n\nWe will prepare your food shortly."
        return subject, text, None

    @staticmethod
    def checkout_kitchen_notification(order_summary):
        subject = "New Order Received"
        text = f"New order received:\n\n{order_summary}\n\nPlease prepare ASAP!"
        return subject, text, None

    @staticmethod
    def webhook_failure_alert(error, event_type):
        subject = "Stripe webhook processing failed"
        text = f"Error: {error}\nEvent type: {event_type}"
        return subject, text, None

    @staticmethod
    def trial_started(name, plan, trial_days, app_url):
        subject = f"Your {plan} trial has started"
        greeting = f"Hi {name}," if name else "Hi there,"
        text = f"""{greeting}

Your {trial_days}-day {plan} trial is now active. Build and publish as many sites as you like.

Manage your sites: {app_url}/generator"""
        html = _html_wrapper(
            f"{plan} Trial Started",
            f"<p>{greeting}</p><p>Your {trial_days}-day {plan} trial is now active.</p>"
            f'<p><a href="{app_url}/generator">Manage your sites</a></p>',
        )
        return subject, text, html

    @staticmethod
    def subscription_active(name, plan, next_billing_date):
        subject = f"Your {plan} subscription is active"
        greeting = f"Hi {name}," if name else "Hi there,"
        billing = next_billing_date.strftime("%B %d, %Y") if next_billing_date else "your next billing date"
        text = f"{greeting}\n\nYour {plan} subscription is active. Next billing date: {billing}."
        return subject, text, None

    @staticmethod
    def subscription_cancelled(name, plan):
        subject = f"Your {plan} subscription was cancelled"
        greeting = f"Hi {name}," if name else "Hi there,"
        text = f"{greeting}\n\nYour {plan} subscription has been cancelled. Your sites remain on the Standard plan."
        html = _html_wrapper("Subscription Cancelled", f"<p>{greeting}</p><p>Your {plan} subscription has been cancelled.</p>", accent="#dc3545")
        return subject, text, html
