"""ISO 20022 pacs.008 and AD payment XML parser implementation."""

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from lxml import etree

from .base import FileParser
from .xml_tree import ParsedTree, as_list, build_tree, format_address, get_path, get_text
from ..models.core import DerivedField, FieldSpec, ParserConfig, Row, Table
from ..models.field_specs import (
    ADDRESS_COMPONENTS,
    AD_PAYMENT_FIELDS,
    PACS008_FIELDS,
    PACS008_HEADER_FIELDS,
    PACS008_TRANSACTION_FIELDS,
    is_address_field,
)
from ..utils.error_handler import ErrorCategory, ErrorHandler, handle_parsing_error


logger = logging.getLogger(__name__)

UNRECOGNIZED_TABLE: Tuple[Tuple[str, ...], ...] = (("Error",), ("Unrecognized XML structure",))


@dataclass(frozen=True)
class AdPaymentDocument:
    """Flat list of payments under a ``Payments`` root"""
    payments: List[Dict[str, Any]]


@dataclass(frozen=True)
class CreditTransferDocument:
    """pacs.008 FIToFICstmrCdtTrf message"""
    group_header: Any
    transactions: List[Any]


@dataclass(frozen=True)
class UnrecognizedDocument:
    root_name: str


DocumentShape = Union[AdPaymentDocument, CreditTransferDocument, UnrecognizedDocument]


def detect_shape(tree: ParsedTree) -> DocumentShape:
    """Classify a parsed document by its root element"""
    if 'Payments' in tree:
        payments = as_list(get_path(tree, 'Payments.Payment'))
        return AdPaymentDocument(payments=[p for p in payments if isinstance(p, dict)])

    transfer = get_path(tree, 'Document.FIToFICstmrCdtTrf')
    if isinstance(transfer, dict):
        return CreditTransferDocument(
            group_header=transfer.get('GrpHdr'),
            transactions=as_list(transfer.get('CdtTrfTxInf')),
        )

    root_name = next(iter(tree), '')
    return UnrecognizedDocument(root_name=root_name)


def is_positive_amount(value: str) -> bool:
    try:
        amount = Decimal(value.strip())
    except InvalidOperation:
        return False
    return amount.is_finite() and amount > 0


class XMLParser(FileParser):
    """Parser for pacs.008 credit transfers and AD payment lists.

    Both layouts share one tree-building step; the root element decides
    which projection applies. A document of any other shape decodes to a
    one-row error table instead of raising.
    """

    format_type = 'xml'

    def __init__(self,
                 config: ParserConfig,
                 error_handler: Optional[ErrorHandler] = None,
                 derived_fields: Optional[Sequence[DerivedField]] = None):
        super().__init__(config, error_handler)
        self.derived_fields: Tuple[DerivedField, ...] = tuple(derived_fields or ())

    def parse(self, data: bytes) -> Table:
        """Decode an XML document into a Table"""
        try:
            tree = build_tree(data)
        except etree.XMLSyntaxError as e:
            handle_parsing_error(self.error_handler, None, e, line_number=e.lineno)
            raise

        shape = detect_shape(tree)

        if isinstance(shape, AdPaymentDocument):
            return self.project_ad_payments(shape)
        if isinstance(shape, CreditTransferDocument):
            return self.project_credit_transfers(shape)

        self.error_handler.log_warning(
            f"Unrecognized XML root element: {shape.root_name}",
            "UNRECOGNIZED_STRUCTURE",
            ErrorCategory.FILE_FORMAT,
            context={'root': shape.root_name}
        )
        return [list(row) for row in UNRECOGNIZED_TABLE]

    def project_ad_payments(self, document: AdPaymentDocument) -> Table:
        """One row per payment with a beneficiary and a positive amount"""
        rows: Table = [self.text_decoder.header(AD_PAYMENT_FIELDS)]

        for index, payment in enumerate(document.payments):
            beneficiary_id = get_text(payment, 'BeneficiaryID')
            total_amount = get_text(payment, 'TotalAmount')
            if not beneficiary_id or not is_positive_amount(total_amount):
                logger.debug(f"Skipping payment {index}: no beneficiary or non-positive amount")
                continue

            values = {spec.key: get_text(payment, spec.source) for spec in AD_PAYMENT_FIELDS if spec.source}
            values['Currency'] = self.config.ad_payment_currency
            rows.append(self.text_decoder.project_row(values, AD_PAYMENT_FIELDS))

        return rows

    def project_credit_transfers(self, document: CreditTransferDocument) -> Table:
        """One row per CdtTrfTxInf, each repeating the group header fields"""
        header = self.text_decoder.header(PACS008_FIELDS)
        header.extend(derived.key for derived in self.derived_fields)
        rows: Table = [header]

        group_values = self._extract(document.group_header, PACS008_HEADER_FIELDS)

        for transaction in document.transactions:
            values = dict(group_values)
            values.update(self._extract(transaction, PACS008_TRANSACTION_FIELDS))
            rows.append(self._with_derived(values))

        return rows

    def _extract(self, node: Any, specs: Sequence[FieldSpec]) -> Dict[str, str]:
        values = {}
        for spec in specs:
            if is_address_field(spec):
                values[spec.key] = format_address(get_path(node, spec.source), ADDRESS_COMPONENTS)
            else:
                values[spec.key] = get_text(node, spec.source)
        return values

    def _with_derived(self, values: Dict[str, str]) -> Row:
        row = self.text_decoder.project_row(values, PACS008_FIELDS)
        for derived in self.derived_fields:
            row.append(derived.compute(dict(values)) or "")
        return row
