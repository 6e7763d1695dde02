#!/usr/bin/env python
"""
Send a real test email through Brevo.

Reads BREVO_DSN, or BREVO_API_KEY / BREVO_HOST / BREVO_PORT, from the
environment (.env.local or .env are loaded automatically).

Usage:
    python scripts/send_test_email.py sender@example.com recipient@example.com
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from brevo_mailer import config
from brevo_mailer.providers.email_service import create_email_service, create_email_service_from_dsn


def main():
    if len(sys.argv) != 3:
        print(__doc__)
        sys.exit(2)

    from_email, to_email = sys.argv[1], sys.argv[2]

    if config.BREVO_DSN:
        service = create_email_service_from_dsn(config.BREVO_DSN)
    else:
        service = create_email_service(config.get_brevo_config())

    print("🧪 Testing Brevo Email Send")
    print("=" * 60)
    print(f"Endpoint: {service.adapter}")
    print(f"\nSending test email to {to_email}...")

    response = service.send_email(
        to=to_email,
        from_email=from_email,
        subject='Test Email from Brevo Mailer',
        body='Hello! This is a test email sent via the Brevo adapter.',
        tags=['test']
    )

    print()
    if response.success:
        print("✅ Email sent successfully!")
        print(f"   Message ID: {response.message_id}")
    else:
        print(f"❌ Email failed: {response.error}")
        sys.exit(1)


if __name__ == '__main__':
    main()
