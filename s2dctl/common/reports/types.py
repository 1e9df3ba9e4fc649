from typing import Collection, NewType

ForceCode = NewType("ForceCode", str)
# Container would suffice. However, dacite is unable to deserialize a list to
# attributes annotated as Iterable or Container.
ForceFlags = Collection[ForceCode]
MessageCode = NewType("MessageCode", str)
ServiceAction = NewType("ServiceAction", str)
SeverityLevel = NewType("SeverityLevel", str)
