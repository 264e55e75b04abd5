"""DynamoDB implementation of Job Repository."""

import logging
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Type

import aioboto3
from boto3.dynamodb.conditions import Attr
from botocore.exceptions import ClientError
from pydantic import BaseModel

from ..domain.entities.adaptation_job import AdaptationJob
from ..domain.entities.job import BaseJob, JobStatus
from ..domain.errors import JobAlreadyFinalizedError, JobNotFoundError
from ..domain.interfaces.job_repository import JobRepository
from .dynamodb_codec import from_dynamodb, to_dynamodb

logger = logging.getLogger(__name__)

UPDATE_CONDITION = "attribute_exists(id) AND #status = :processing"


def _is_conditional_failure(error: ClientError) -> bool:
    return error.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException"


class DynamoDBJobRepository(JobRepository):
    """DynamoDB repository for background jobs.

    Items are keyed by ``id``. Partial updates are a single ``UpdateItem``
    call, which DynamoDB applies atomically per item. The update is
    conditional on the stored status still being ``processing``, so two
    workers finishing the same job cannot both write a terminal state.
    """

    def __init__(
        self,
        table_name: str,
        region_name: str = "us-east-1",
        job_model: Type[BaseJob] = AdaptationJob,
    ):
        """Initialize the DynamoDB job repository.

        Args:
            table_name: The name of the DynamoDB table.
            region_name: AWS region name (default: us-east-1).
            job_model: The job class stored in the table.
        """
        self.table_name = table_name
        self.region_name = region_name
        self.job_model = job_model
        self._session = aioboto3.Session()

    async def create_job(self, job: BaseJob) -> str:
        """Store a new job, refusing to overwrite an existing id.

        Args:
            job: The job entity to store.

        Returns:
            str: The job id.

        Raises:
            ValueError: If a job with the same id already exists.
        """
        async with self._session.resource("dynamodb", region_name=self.region_name) as dynamodb:
            table = await dynamodb.Table(self.table_name)
            try:
                await table.put_item(
                    Item=self._job_to_item(job),
                    ConditionExpression="attribute_not_exists(id)",
                )
            except ClientError as e:
                if _is_conditional_failure(e):
                    raise ValueError(f"Job with id {job.job_id} already exists") from e
                raise
        return job.job_id

    async def get_job(self, job_id: str) -> BaseJob:
        """Retrieve a job by ID from DynamoDB.

        Args:
            job_id: The unique identifier of the job.

        Returns:
            BaseJob: The job entity.

        Raises:
            JobNotFoundError: If the job is not found.
        """
        async with self._session.resource("dynamodb", region_name=self.region_name) as dynamodb:
            table = await dynamodb.Table(self.table_name)
            response = await table.get_item(Key={"id": job_id}, ConsistentRead=True)

            if "Item" not in response:
                raise JobNotFoundError(f"Job with id {job_id} not found")

            return self._item_to_job(response["Item"])

    async def update_job(self, job_id: str, fields: Mapping[str, Any]) -> BaseJob:
        """Apply the given fields to a processing job in one ``UpdateItem`` call.

        Fields set to ``None`` are removed from the item.

        Args:
            job_id: The unique identifier of the job.
            fields: Field names mapped to new values.

        Returns:
            BaseJob: The job after the update.

        Raises:
            JobNotFoundError: If the job is not found.
            JobAlreadyFinalizedError: If the job is already terminal.
            ValueError: If a field is unknown.
        """
        unknown = [name for name in fields if name not in self.job_model.model_fields or name == "job_id"]
        if unknown:
            raise ValueError(f"Cannot update job fields: {unknown}")

        names: Dict[str, str] = {"#status": "status"}
        values: Dict[str, Any] = {":processing": JobStatus.PROCESSING.value}
        set_clauses = []
        remove_clauses = []
        for index, (name, value) in enumerate(fields.items()):
            placeholder = f"#f{index}"
            names[placeholder] = name
            if value is None:
                remove_clauses.append(placeholder)
            else:
                values[f":v{index}"] = self._to_attribute(value)
                set_clauses.append(f"{placeholder} = :v{index}")

        expression = ""
        if set_clauses:
            expression += "SET " + ", ".join(set_clauses)
        if remove_clauses:
            expression += " REMOVE " + ", ".join(remove_clauses)

        async with self._session.resource("dynamodb", region_name=self.region_name) as dynamodb:
            table = await dynamodb.Table(self.table_name)
            try:
                response = await table.update_item(
                    Key={"id": job_id},
                    UpdateExpression=expression.strip(),
                    ConditionExpression=UPDATE_CONDITION,
                    ExpressionAttributeNames=names,
                    ExpressionAttributeValues=values,
                    ReturnValues="ALL_NEW",
                    ReturnValuesOnConditionCheckFailure="ALL_OLD",
                )
            except ClientError as e:
                if not _is_conditional_failure(e):
                    raise
                # The old item comes back only when the job exists
                if "Item" in e.response:
                    status = e.response["Item"].get("status")
                    raise JobAlreadyFinalizedError(f"Job with id {job_id} is already {status}") from e
                raise JobNotFoundError(f"Job with id {job_id} not found") from e

        return self._item_to_job(response["Attributes"])

    async def list_jobs(self, status: JobStatus) -> list[BaseJob]:
        """Scan for jobs in the given status.

        Args:
            status: The status to filter on.

        Returns:
            list[BaseJob]: The matching jobs.
        """
        jobs = []
        scan_kwargs: Dict[str, Any] = {"FilterExpression": Attr("status").eq(status.value)}
        async with self._session.resource("dynamodb", region_name=self.region_name) as dynamodb:
            table = await dynamodb.Table(self.table_name)
            while True:
                response = await table.scan(**scan_kwargs)
                jobs.extend(self._item_to_job(item) for item in response.get("Items", []))
                if "LastEvaluatedKey" not in response:
                    break
                scan_kwargs["ExclusiveStartKey"] = response["LastEvaluatedKey"]
        return jobs

    def _to_attribute(self, value: Any) -> Any:
        """Convert a job field value to a DynamoDB attribute value."""
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, datetime):
            return value.isoformat()
        if isinstance(value, BaseModel):
            return to_dynamodb(value.model_dump(by_alias=True))
        if isinstance(value, (list, tuple)):
            return [self._to_attribute(item) for item in value]
        return to_dynamodb(value)

    def _job_to_item(self, job: BaseJob) -> Dict[str, Any]:
        """Convert a job entity to a DynamoDB item.

        Args:
            job: The job entity.

        Returns:
            Dict: The DynamoDB item, without attributes whose value is None.
        """
        item: Dict[str, Any] = {"id": job.job_id}
        for name, value in job:
            if name == "job_id" or value is None:
                continue
            item[name] = self._to_attribute(value)
        return item

    def _item_to_job(self, item: Dict[str, Any]) -> BaseJob:
        """Convert a DynamoDB item to a job entity.

        Args:
            item: The DynamoDB item.

        Returns:
            BaseJob: The job entity.
        """
        fields = from_dynamodb({name: value for name, value in item.items() if name != "id"})
        return self.job_model.model_validate({"job_id": item["id"], **fields})
