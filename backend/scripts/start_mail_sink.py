#!/usr/bin/env python3
"""Local SMTP sink for ContactFlow development.

Starts an aiosmtpd server that accepts every message the API sends and logs
its headers and HTML body, so verification links can be followed without a
real mail server.

Usage:
    python scripts/start_mail_sink.py

    # then run the API against it
    SMTP_HOST=localhost SMTP_PORT=1025 uvicorn main:app --app-dir src

Environment Variables:
    MAIL_SINK_HOST: Bind address (default: 127.0.0.1)
    MAIL_SINK_PORT: Listen port (default: 1025)
"""

import asyncio
import logging
import os
import re
import sys
from email import message_from_bytes
from email.policy import default as default_policy

from aiosmtpd.controller import Controller
from aiosmtpd.smtp import Envelope, Session, SMTP

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)
logger = logging.getLogger("mail_sink")

_LINK = re.compile(r'href="([^"]+)"')


class LoggingSinkHandler:
    """aiosmtpd handler that logs and discards every message."""

    async def handle_DATA(self, server: SMTP, session: Session, envelope: Envelope) -> str:
        msg = message_from_bytes(envelope.content, policy=default_policy)
        logger.info("=" * 60)
        logger.info(f"From:     {msg['From']}")
        logger.info(f"To:       {', '.join(envelope.rcpt_tos)}")
        logger.info(f"Subject:  {msg['Subject']}")
        if msg['Reply-To']:
            logger.info(f"Reply-To: {msg['Reply-To']}")

        body = msg.get_body(preferencelist=("html", "plain"))
        if body is not None:
            content = body.get_content()
            for link in _LINK.findall(content):
                logger.info(f"Link:     {link.replace('&amp;', '&')}")
            logger.debug(content)

        return "250 Message accepted for delivery"


async def main():
    host = os.getenv('MAIL_SINK_HOST', '127.0.0.1')
    port = int(os.getenv('MAIL_SINK_PORT', '1025'))

    controller = Controller(LoggingSinkHandler(), hostname=host, port=port)
    controller.start()

    logger.info(f"Mail sink listening on {host}:{port}")
    logger.info("Press Ctrl+C to stop")

    try:
        while True:
            await asyncio.sleep(3600)
    finally:
        controller.stop()
        logger.info("Mail sink stopped")


if __name__ == '__main__':
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Received interrupt signal, exiting")
        sys.exit(0)
