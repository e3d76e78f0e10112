"""Static column definitions shared by the decoders and their consumers.

Each table lists, in output order, the columns a decoder emits. The keys are
the contract with the field-mapping layer: renaming one without updating the
consumer silently drops that column from the mapped result.
"""

from typing import Dict, Tuple

from .core import FieldSpec, FixedWidthField


MT101_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec("Sender's Reference", "20", "20"),
    FieldSpec("Customer Specified Reference", "21R", "21R"),
    FieldSpec("Transaction Reference", "21", "21"),
    FieldSpec("F/X Deal Reference", "21F", "21F"),
    FieldSpec("Instruction Code", "23E", "23E"),
    FieldSpec("Account Identification", "25", "25"),
    FieldSpec("Statement Number / Sequence Number", "28D", "28D"),
    FieldSpec("Requested Execution Date", "30", "30"),
    FieldSpec("Amount & Currency", "32B", "32B"),
    FieldSpec("Ordering Customer (A)", "50A", "50A"),
    FieldSpec("Ordering Customer (F)", "50F", "50F"),
    FieldSpec("Ordering Customer (H)", "50H", "50H"),
    FieldSpec("Ordering Institution (A)", "52A", "52A"),
    FieldSpec("Ordering Institution (D)", "52D", "52D"),
    FieldSpec("Sender's Correspondent (A)", "53A", "53A"),
    FieldSpec("Sender's Correspondent (B)", "53B", "53B"),
    FieldSpec("Sender's Correspondent (D)", "53D", "53D"),
    FieldSpec("Receiver's Correspondent (A)", "54A", "54A"),
    FieldSpec("Receiver's Correspondent (B)", "54B", "54B"),
    FieldSpec("Receiver's Correspondent (D)", "54D", "54D"),
    FieldSpec("Third Reimbursement Institution (A)", "55A", "55A"),
    FieldSpec("Third Reimbursement Institution (B)", "55B", "55B"),
    FieldSpec("Third Reimbursement Institution (D)", "55D", "55D"),
    FieldSpec("Intermediary Institution (A)", "56A", "56A"),
    FieldSpec("Intermediary Institution (C)", "56C", "56C"),
    FieldSpec("Intermediary Institution (D)", "56D", "56D"),
    FieldSpec("Account With Institution (A)", "57A", "57A"),
    FieldSpec("Account With Institution (B)", "57B", "57B"),
    FieldSpec("Account With Institution (D)", "57D", "57D"),
    FieldSpec("Beneficiary Customer", "59", "59"),
    FieldSpec("Beneficiary Customer (F)", "59F", "59F"),
    FieldSpec("Remittance Information", "70", "70"),
    FieldSpec("Details of Charges", "71A", "71A"),
    FieldSpec("Sender's Charges", "71F", "71F"),
    FieldSpec("Receiver's Charges", "71G", "71G"),
    FieldSpec("Bank to Bank Information", "72", "72"),
    FieldSpec("Regulatory Reporting", "77B", "77B"),
    FieldSpec("Envelope Contents", "77T", "77T"),
    FieldSpec("MPH Bank Name", "MPH01", "MPH01"),
    FieldSpec("MPH Account Number", "MPH02", "MPH02"),
    FieldSpec("MPH SWIFT Code", "MPH03", "MPH03"),
    FieldSpec("MPH Address Line 1", "MPH04", "MPH04"),
    FieldSpec("MPH Address Line 2", "MPH05", "MPH05"),
    FieldSpec("MPH Address Line 3", "MPH06", "MPH06"),
    FieldSpec("MPH Country", "MPH07", "MPH07"),
)


# Record type and code fields are fixed width and kept untrimmed.
CFONB_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec("Record Type", "RecordType", FixedWidthField(0, 2, trim=False)),
    FieldSpec("Bank Code", "BankCode", FixedWidthField(2, 7, trim=False)),
    FieldSpec("Desk Code", "DeskCode", FixedWidthField(7, 11, trim=False)),
    FieldSpec("Currency Code", "CurrencyCode", FixedWidthField(11, 14, trim=False)),
    FieldSpec("Account Number", "AccountNumber", FixedWidthField(14, 39)),
    FieldSpec("Beneficiary Name", "BeneficiaryName", FixedWidthField(39, 79)),
    FieldSpec("Beneficiary Address 1", "BeneficiaryAddress1", FixedWidthField(79, 119)),
    FieldSpec("Beneficiary Address 2", "BeneficiaryAddress2", FixedWidthField(119, 159)),
    FieldSpec("Beneficiary Address 3", "BeneficiaryAddress3", FixedWidthField(159, 199)),
    FieldSpec("Amount", "Amount", FixedWidthField(199, 214)),
    FieldSpec("Operation Code", "OperationCode", FixedWidthField(214, 217, trim=False)),
    FieldSpec("Operation Date", "OperationDate", FixedWidthField(217, 223, trim=False)),
    FieldSpec("Currency", "Currency", FixedWidthField(223, 226, trim=False)),
    FieldSpec("Reference", "Reference", FixedWidthField(226, 241)),
    FieldSpec("Bank Details", "BankDetails", FixedWidthField(241, None)),
)


# Paths are relative to a Payment record. Currency is not carried by the
# format and comes from ParserConfig.ad_payment_currency.
AD_PAYMENT_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec("Beneficiary ID", "BeneficiaryID", "BeneficiaryID"),
    FieldSpec("Beneficiary Name", "BeneficiaryName", "BeneficiaryName"),
    FieldSpec("Reference", "Reference", "Reference"),
    FieldSpec("Amount", "Amount", "TotalAmount"),
    FieldSpec("Currency", "Currency", ""),
)


# Group header paths are relative to GrpHdr, the rest to CdtTrfTxInf.
# Address columns point at the PstlAdr element and are flattened.
PACS008_HEADER_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec("Message ID", "MsgId", "MsgId"),
    FieldSpec("Creation Date/Time", "CreDtTm", "CreDtTm"),
    FieldSpec("Number of Transactions", "NbOfTxs", "NbOfTxs"),
    FieldSpec("Settlement Method", "SttlmMtd", "SttlmInf.SttlmMtd"),
)

PACS008_TRANSACTION_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec("Instruction ID", "InstrId", "PmtId.InstrId"),
    FieldSpec("End to End ID", "EndToEndId", "PmtId.EndToEndId"),
    FieldSpec("UETR", "UETR", "PmtId.UETR"),
    FieldSpec("Interbank Settlement Amount", "IntrBkSttlmAmt", "IntrBkSttlmAmt.#text"),
    FieldSpec("Interbank Settlement Currency", "IntrBkSttlmAmt_Ccy", "IntrBkSttlmAmt.@Ccy"),
    FieldSpec("Interbank Settlement Date", "IntrBkSttlmDt", "IntrBkSttlmDt"),
    FieldSpec("Instructed Amount", "InstdAmt", "InstdAmt.#text"),
    FieldSpec("Instructed Amount Currency", "InstdAmt_Ccy", "InstdAmt.@Ccy"),
    FieldSpec("Charge Bearer", "ChrgBr", "ChrgBr"),
    FieldSpec("Instructing Agent BICFI", "InstgAgt_BICFI", "InstgAgt.FinInstnId.BICFI"),
    FieldSpec("Instructed Agent BICFI", "InstdAgt_BICFI", "InstdAgt.FinInstnId.BICFI"),
    FieldSpec("Intermediary Agent 1 BICFI", "IntrmyAgt1_BICFI", "IntrmyAgt1.FinInstnId.BICFI"),
    FieldSpec("Intermediary Agent 1 Name", "IntrmyAgt1_Nm", "IntrmyAgt1.FinInstnId.Nm"),
    FieldSpec("Intermediary Agent 1 Address", "IntrmyAgt1_Address", "IntrmyAgt1.FinInstnId.PstlAdr"),
    FieldSpec("Debtor Name", "Dbtr_Nm", "Dbtr.Nm"),
    FieldSpec("Debtor Address", "Dbtr_Address", "Dbtr.PstlAdr"),
    FieldSpec("Debtor Account IBAN", "DbtrAcct_IBAN", "DbtrAcct.Id.IBAN"),
    FieldSpec("Debtor Agent BICFI", "DbtrAgt_BICFI", "DbtrAgt.FinInstnId.BICFI"),
    FieldSpec("Creditor Agent BICFI", "CdtrAgt_BICFI", "CdtrAgt.FinInstnId.BICFI"),
    FieldSpec("Creditor Agent Name", "CdtrAgt_Nm", "CdtrAgt.FinInstnId.Nm"),
    FieldSpec("Creditor Agent Address", "CdtrAgt_Address", "CdtrAgt.FinInstnId.PstlAdr"),
    FieldSpec("Creditor Name", "Cdtr_Nm", "Cdtr.Nm"),
    FieldSpec("Creditor Address", "Cdtr_Address", "Cdtr.PstlAdr"),
    FieldSpec("Creditor Account IBAN", "CdtrAcct_IBAN", "CdtrAcct.Id.IBAN"),
    FieldSpec("Purpose Code", "Purp_Cd", "Purp.Cd"),
    FieldSpec("Remittance Information Unstructured", "RmtInf_Ustrd", "RmtInf.Ustrd"),
)

PACS008_FIELDS: Tuple[FieldSpec, ...] = PACS008_HEADER_FIELDS + PACS008_TRANSACTION_FIELDS

# Sub-elements of PstlAdr joined into a single address cell, in order.
ADDRESS_COMPONENTS: Tuple[str, ...] = ('StrtNm', 'BldgNb', 'PstCd', 'TwnNm', 'DstrctNm', 'Ctry')

FIELD_SPECS: Dict[str, Tuple[FieldSpec, ...]] = {
    'mt101': MT101_FIELDS,
    'cfonb': CFONB_FIELDS,
    'pacs008': PACS008_FIELDS,
    'ad_payment': AD_PAYMENT_FIELDS,
}


def is_address_field(spec: FieldSpec) -> bool:
    """Check whether a pacs.008 column holds a flattened postal address"""
    return isinstance(spec.source, str) and spec.source.endswith('PstlAdr')
