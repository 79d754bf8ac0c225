"""FastAPI dependencies wiring ContactService to its collaborators.

Each request gets its own service instance built from the request's database
session, so nothing is shared between requests. Tests override
get_mail_gateway / get_token_issuer / get_db to inject fakes.
"""

from datetime import timedelta

from fastapi import Depends
from sqlalchemy.orm import Session

from config import Settings, get_settings
from database import get_db
from domain.contact.ports import MailGatewayPort, RecordStorePort
from domain.contact.service import ContactService
from domain.contact.tokens import TokenIssuer
from infrastructure.mail.smtp_mail_gateway import SmtpMailGateway
from infrastructure.repositories.contact_repository import SqlAlchemyContactStore


def get_contact_store(db: Session = Depends(get_db)) -> RecordStorePort:
    return SqlAlchemyContactStore(db)


def get_mail_gateway(settings: Settings = Depends(get_settings)) -> MailGatewayPort:
    return SmtpMailGateway.from_settings(settings)


def get_token_issuer(settings: Settings = Depends(get_settings)) -> TokenIssuer:
    return TokenIssuer(
        ttl=timedelta(hours=settings.VERIFICATION_TOKEN_TTL_HOURS),
        nbytes=settings.VERIFICATION_TOKEN_BYTES,
    )


def get_contact_service(
    store: RecordStorePort = Depends(get_contact_store),
    mailer: MailGatewayPort = Depends(get_mail_gateway),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
    settings: Settings = Depends(get_settings),
) -> ContactService:
    return ContactService(
        store=store,
        mailer=mailer,
        token_issuer=token_issuer,
        admin_email=settings.EMAIL_TO,
        frontend_url=settings.FRONTEND_URL,
        site_name=settings.MAIL_FROM_NAME,
    )
