from .client import Client
from .event import Event
from .documents import Quote, Invoice, Contract, Questionnaire

__all_models = [Client, Event, Quote, Invoice, Contract, Questionnaire]

DOCUMENT_MODELS = {
    "quotes": Quote,
    "invoices": Invoice,
    "contracts": Contract,
    "questionnaires": Questionnaire,
}
