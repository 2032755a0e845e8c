from botocore.exceptions import ClientError
import logging
from typing import Optional, List
from boto3.dynamodb.conditions import Key
from common.models.cleaning import CleaningState, CleaningStatus
from common.repository.room_repo import CLEANING_PARTITION
from common.utils.custom_exceptions import CleaningStatusChanged

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from types_boto3_dynamodb.service_resource import Table
else:
    Table = object


logger = logging.getLogger(__name__)


def _condition_failed(err: ClientError) -> bool:
    return err.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException"


class CleaningRepository:
    def __init__(self, table: Table):
        self.table = table

    def list_statuses(self) -> List[CleaningStatus]:
        query = {
            "KeyConditionExpression": Key("pk").eq(CLEANING_PARTITION)
            & Key("sk").begins_with("ROOM#"),
        }
        statuses = []
        try:
            resp = self.table.query(**query)
            statuses.extend(self._to_domain(item) for item in resp.get("Items", []))
            while "LastEvaluatedKey" in resp:
                resp = self.table.query(**query, ExclusiveStartKey=resp["LastEvaluatedKey"])
                statuses.extend(self._to_domain(item) for item in resp.get("Items", []))
        except ClientError as err:
            logger.error(f"Error listing cleaning statuses: {err}")
            raise
        return statuses

    def get_status(self, room_number: str) -> Optional[CleaningStatus]:
        try:
            response = self.table.get_item(
                Key={"pk": CLEANING_PARTITION, "sk": f"ROOM#{room_number}"},
                ConsistentRead=True,
            )
        except ClientError as err:
            logger.error(f"Error retrieving cleaning status for {room_number}: {err}")
            raise

        item = response.get("Item")
        if not item:
            return None
        return self._to_domain(item)

    def set_status(
        self,
        room_number: str,
        status: CleaningState,
        expected: Optional[CleaningState] = None,
    ) -> CleaningStatus:
        """Write ``status``; with ``expected`` only if the stored state still matches.

        A missing record counts as Clean.
        """
        update = {
            "Key": {"pk": CLEANING_PARTITION, "sk": f"ROOM#{room_number}"},
            "UpdateExpression": "SET #status = :status",
            "ExpressionAttributeNames": {"#status": "cleaning_status"},
            "ExpressionAttributeValues": {":status": status.value},
        }
        if expected is not None:
            update["ExpressionAttributeValues"][":expected"] = expected.value
            if expected == CleaningState.CLEAN:
                update["ConditionExpression"] = (
                    "attribute_not_exists(#status) OR #status = :expected"
                )
            else:
                update["ConditionExpression"] = "#status = :expected"

        try:
            self.table.update_item(**update)
        except ClientError as err:
            if expected is not None and _condition_failed(err):
                raise CleaningStatusChanged(
                    f"Room {room_number} is no longer '{expected.value}'"
                )
            logger.error(f"Error updating cleaning status for {room_number}: {err}")
            raise
        return CleaningStatus(room_number=room_number, status=status)

    def mark_needs_cleaning(self, room_number: str) -> bool:
        """Flag the room dirty; False when it already was."""
        try:
            self.table.update_item(
                Key={"pk": CLEANING_PARTITION, "sk": f"ROOM#{room_number}"},
                UpdateExpression="SET #status = :needs",
                ConditionExpression="attribute_not_exists(#status) OR #status <> :needs",
                ExpressionAttributeNames={"#status": "cleaning_status"},
                ExpressionAttributeValues={":needs": CleaningState.NEEDS_CLEANING.value},
            )
        except ClientError as err:
            if _condition_failed(err):
                return False
            logger.error(f"Error flagging room {room_number} for cleaning: {err}")
            raise
        return True

    @staticmethod
    def _to_domain(item: dict) -> CleaningStatus:
        return CleaningStatus(
            room_number=item["sk"].removeprefix("ROOM#"),
            status=CleaningState(item.get("cleaning_status", CleaningState.CLEAN.value)),
        )
