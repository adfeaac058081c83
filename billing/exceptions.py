from rest_framework import status
from rest_framework.exceptions import APIException


class BillingError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Billing operation failed."
    default_code = "billing_error"


class BillConflict(BillingError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "A bill already exists for this contract and billing cycle."
    default_code = "bill_exists"

    def __init__(self, contract_id=None, cycle_id=None):
        detail = None
        if contract_id is not None and cycle_id is not None:
            detail = f"A bill already exists for contract {contract_id} in cycle {cycle_id}."
        super().__init__(detail)
        self.contract_id = contract_id
        self.cycle_id = cycle_id


class MeterReadingsMissing(BillingError):
    status_code = status.HTTP_412_PRECONDITION_FAILED
    default_detail = "No meter readings recorded for this room and cycle. Record meter readings first."
    default_code = "meter_readings_missing"

    def __init__(self, room=None, cycle=None):
        detail = None
        if room is not None and cycle is not None:
            detail = (
                f"No meter readings recorded for room {room} in cycle {cycle}. "
                "Record the electric and/or water readings for this cycle first."
            )
        super().__init__(detail)


class InvalidBillStatus(BillingError):
    default_detail = "Invalid bill status."
    default_code = "invalid_status"


class AmountOutOfRange(BillingError):
    default_detail = "Bill amounts are too large to store. Check the meter readings and rates."
    default_code = "amount_out_of_range"
