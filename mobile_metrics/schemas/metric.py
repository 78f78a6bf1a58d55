from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator


class EventType(str, Enum):
    INIT = "init"
    SECURITY = "security"


def null_as_empty(v: Any) -> Any:
    # a JSON null leaves a plain string field at its zero value
    return "" if v is None else v


class WireModel(BaseModel):
    # parsed from the SDK's camelCase JSON, python names work too
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


class AppMetric(WireModel):
    id: StrictStr = Field(default="", alias="appId", examples=["com.example.myapp"])
    sdk_version: StrictStr = Field(default="", alias="sdkVersion", examples=["1.0.0"])
    app_version: StrictStr = Field(default="", alias="appVersion", examples=["2.1.0"])

    @field_validator("id", "sdk_version", "app_version", mode="before")
    @classmethod
    def _null_strings(cls, v: Any) -> Any:
        return null_as_empty(v)


class DeviceMetric(WireModel):
    platform: StrictStr = Field(default="", examples=["android", "ios"])
    platform_version: StrictStr = Field(default="", alias="platformVersion", examples=["27"])

    @field_validator("platform", "platform_version", mode="before")
    @classmethod
    def _null_strings(cls, v: Any) -> Any:
        return null_as_empty(v)


class SecurityMetric(WireModel):
    # None means the key was absent; passed=False is a real result
    id: Optional[StrictStr] = Field(default=None, examples=["com.example.DeveloperMode"])
    name: Optional[StrictStr] = Field(default=None, examples=["Developer Mode"])
    passed: Optional[StrictBool] = None


class MetricData(WireModel):
    app: Optional[AppMetric] = None
    device: Optional[DeviceMetric] = None
    security: Optional[List[SecurityMetric]] = None

    @field_validator("security", mode="before")
    @classmethod
    def _null_entries(cls, v: Any) -> Any:
        # a null entry is an element with every field absent
        if isinstance(v, list):
            return [{} if item is None else item for item in v]
        return v

    def is_empty(self) -> bool:
        return self.app is None and self.device is None and self.security is None


class Metric(WireModel):
    client_timestamp: Optional[StrictStr] = Field(
        default=None, alias="timestamp", examples=["1520853523661"]
    )
    client_id: StrictStr = Field(default="", alias="clientId", examples=["some-unique-client-id"])
    event_type: StrictStr = Field(default="", alias="type", examples=["init", "security"])
    data: Optional[MetricData] = None

    @field_validator("client_id", "event_type", mode="before")
    @classmethod
    def _null_strings(cls, v: Any) -> Any:
        return null_as_empty(v)

    @field_validator("client_timestamp", mode="before")
    @classmethod
    def _number_as_text(cls, v: Any) -> Any:
        # JSON numbers keep their decimal text, integer-ness is checked on validation
        if isinstance(v, bool):
            return v
        if isinstance(v, (int, float)):
            return str(v)
        return v
