from botocore.exceptions import ClientError
import logging
from typing import Optional
from common.models.users import User, UserRole

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from types_boto3_dynamodb.service_resource import Table
else:
    Table = object

logger = logging.getLogger(__name__)


class UserRepository:
    def __init__(self, table: Table):
        self.table = table

    def add_user(self, user: User):
        try:
            self.table.put_item(
                Item={
                    "pk": f"USER#{user.username}",
                    "sk": "DETAILS",
                    "user_id": user.user_id,
                    "password": user.password,
                    "role": user.role.value,
                },
                ConditionExpression="attribute_not_exists(pk)",
            )
        except ClientError as err:
            logger.error(
                "couldn't add user %s. Error: %s",
                user.username,
                err.response["Error"]["Message"],
            )
            raise

    def get_by_username(self, username: str) -> Optional[User]:
        try:
            response = self.table.get_item(
                Key={"pk": f"USER#{username}", "sk": "DETAILS"}
            )
        except ClientError as err:
            logger.error(f"Error retrieving user {username}: {err}")
            raise

        item = response.get("Item")
        if not item:
            return None

        return self._to_domain(item=item)

    @staticmethod
    def _to_domain(item: dict) -> User:
        return User(
            user_id=item["user_id"],
            username=item["pk"].split("#", 1)[1],
            password=item["password"],
            role=UserRole(item["role"]),
        )
