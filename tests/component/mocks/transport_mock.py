"""
Transport Mocks for Component Testing

Two stand-ins for RestClient, both satisfying TransportProtocol:

- MockTransport: scripted envelopes per API path, for asserting payloads
- FakePlatform: small in-memory PAS tenant (secrets, folders, principals,
  manual sets) that answers RedRock queries, for end-to-end flows
"""
import copy
import fnmatch
import re
import uuid
from collections import defaultdict, deque
from typing import Any, Deque, Dict, List, Optional

from pas_sdk.platform.query import QUERY_API

_QUERY = re.compile(r"^SELECT \* FROM (\w+) WHERE 1=1(.*)$")
_CLAUSE = re.compile(r" AND (\w+)=('(?:[^']|'')*'|true|false)")


def ok(result: Any = None) -> Dict[str, Any]:
    """Successful envelope"""
    return {"success": True, "Result": result, "Message": None, "Exception": None}


def failure(message: str, exception: Optional[str] = None) -> Dict[str, Any]:
    """Failed envelope"""
    return {"success": False, "Result": None, "Message": message, "Exception": exception}


def query_result(*rows: Dict[str, Any]) -> Dict[str, Any]:
    """Envelope of a RedRock query returning ``rows``"""
    return ok({"Count": len(rows), "Columns": [], "Results": [{"Entities": [], "Row": row} for row in rows]})


class MockTransport:
    """Records calls and answers with scripted envelopes"""

    def __init__(self):
        self.requests: List[Dict[str, Any]] = []
        self._responses: Dict[str, Deque[Dict[str, Any]]] = defaultdict(deque)
        self._default_response = ok()
        self._should_raise: Optional[Exception] = None

    def call(self, method, args=None, response_model=None):
        self.requests.append({"method": method, "args": copy.deepcopy(args)})

        if self._should_raise:
            raise self._should_raise

        return response_model.model_validate(self._respond(method, args))

    def _respond(self, method: str, args: Any) -> Dict[str, Any]:
        queue = self._responses.get(method)
        if queue:
            # The last scripted response for a path keeps answering
            return queue.popleft() if len(queue) > 1 else queue[0]
        return self._default_response

    # Test helper methods

    def set_response(self, method: str, *payloads: Dict[str, Any]):
        """Answer calls to ``method`` with ``payloads`` in order"""
        self._responses[method] = deque(payloads)

    def set_query_rows(self, *rows: Dict[str, Any]):
        """Answer RedRock queries with ``rows``"""
        self.set_response(QUERY_API, query_result(*rows))

    def set_default_response(self, payload: Dict[str, Any]):
        self._default_response = payload

    def set_error(self, error: Exception):
        """Set an error to be raised on every call"""
        self._should_raise = error

    def get_requests(self, method: Optional[str] = None) -> List[Dict[str, Any]]:
        """Get recorded requests, optionally filtered by method path"""
        if method:
            return [r for r in self.requests if r["method"] == method]
        return self.requests

    def get_last_request(self) -> Optional[Dict[str, Any]]:
        return self.requests[-1] if self.requests else None

    def get_scripts(self) -> List[str]:
        """Query scripts sent so far"""
        return [r["args"]["Script"] for r in self.get_requests(QUERY_API)]

    def assert_request_made(self, pattern: str) -> Dict[str, Any]:
        """Assert that a call matching the path pattern was made"""
        for req in self.requests:
            if fnmatch.fnmatch(req["method"], pattern):
                return req
        raise AssertionError(
            f"No call matching '{pattern}' was made. Calls: {[r['method'] for r in self.requests]}"
        )

    def assert_no_requests(self):
        assert len(self.requests) == 0, f"Expected no calls, but got: {self.requests}"


class FakePlatform(MockTransport):
    """In-memory tenant answering the secret, folder and set APIs"""

    def __init__(self):
        super().__init__()
        self.secrets: Dict[str, Dict[str, Any]] = {}
        self.tables: Dict[str, List[Dict[str, Any]]] = defaultdict(list)
        self.grants: Dict[str, List[Dict[str, Any]]] = {}
        self.members: Dict[str, List[Dict[str, Any]]] = defaultdict(list)

    @staticmethod
    def new_id() -> str:
        return str(uuid.uuid4())

    # ============ Seeding ============

    def add_folder(self, name: str, parent_path: str = "") -> str:
        folder_id = self.new_id()
        self.tables["Sets"].append({
            "ID": folder_id,
            "Name": name,
            "ObjectType": "DataVault",
            "CollectionType": "Phantom",
            "ParentPath": parent_path,
            "Parent": self.folder_id_by_path(parent_path),
        })
        return folder_id

    def add_set(self, name: str, object_type: str) -> str:
        set_id = self.new_id()
        self.tables["Sets"].append({
            "ID": set_id,
            "Name": name,
            "ObjectType": object_type,
            "CollectionType": "ManualBucket",
        })
        return set_id

    def add_user(self, username: str) -> str:
        user_id = self.new_id()
        self.tables["User"].append({"ID": user_id, "Username": username})
        return user_id

    def add_role(self, name: str) -> str:
        role_id = self.new_id()
        self.tables["Role"].append({"ID": role_id, "Name": name})
        return role_id

    def add_secret(self, name: str, text: str, parent_path: str = "") -> str:
        secret_id = self.new_id()
        self.secrets[secret_id] = {
            "ID": secret_id,
            "SecretName": name,
            "SecretText": text,
            "Type": "Text",
            "FolderId": self.folder_id_by_path(parent_path),
            "ParentPath": parent_path,
        }
        return secret_id

    def folder_id_by_path(self, path: str) -> str:
        if not path:
            return ""
        for row in self.tables["Sets"]:
            if row["CollectionType"] == "Phantom" and self.folder_path(row["ID"]) == path:
                return row["ID"]
        raise KeyError(path)

    def folder_path(self, folder_id: str) -> str:
        if not folder_id:
            return ""
        for row in self.tables["Sets"]:
            if row["ID"] == folder_id:
                return f"{row['ParentPath']}\\{row['Name']}" if row["ParentPath"] else row["Name"]
        raise KeyError(folder_id)

    # ============ Dispatch ============

    def _respond(self, method: str, args: Any) -> Dict[str, Any]:
        handler = self._handlers().get(method)
        if handler is None:
            return failure(f"Unknown API {method}")
        return handler(args)

    def _handlers(self):
        return {
            QUERY_API: self._query,
            "/ServerManage/AddSecret": self._add_secret,
            "/ServerManage/GetSecret": self._get_secret,
            "/ServerManage/GetSecretRightsAndChallenges": self._get_challenges,
            "/ServerManage/UpdateSecret": self._update_secret,
            "/ServerManage/DeleteSecret": self._delete_secret,
            "/ServerManage/RetrieveSecretContents": self._retrieve_secret,
            "/ServerManage/MoveSecret": self._move_secret,
            "/ServerManage/SetSecretPermissions": self._set_permissions,
            "/ServerManage/AddSecretsFolder": self._add_folder,
            "/Collection/UpdateMembersCollection": self._update_members,
        }

    def _rows(self, table: str) -> List[Dict[str, Any]]:
        if table == "DataVault":
            return [
                {k: v for k, v in secret.items() if k != "SecretText"}
                for secret in self.secrets.values()
            ]
        return self.tables[table]

    @staticmethod
    def _literal(token: str) -> Any:
        if token in ("true", "false"):
            return token == "true"
        return token[1:-1].replace("''", "'")

    def _query(self, args):
        match = _QUERY.match(args["Script"])
        if not match:
            return failure("Invalid query", args["Script"])
        table, clauses = match.groups()
        predicates = [(col, self._literal(token)) for col, token in _CLAUSE.findall(clauses)]

        rows = [
            row for row in self._rows(table)
            if all(row.get(col, "") == value for col, value in predicates)
        ]
        return query_result(*copy.deepcopy(rows))

    def _secret(self, args) -> Optional[Dict[str, Any]]:
        return self.secrets.get(args.get("ID"))

    def _add_secret(self, args):
        secret_id = self.new_id()
        record = {k: v for k, v in args.items() if k != "updateChallenges"}
        record["ID"] = secret_id
        record["FolderId"] = args.get("FolderId", "")
        record["ParentPath"] = self.folder_path(record["FolderId"])
        self.secrets[secret_id] = record
        return ok(secret_id)

    def _get_secret(self, args):
        secret = self._secret(args)
        if secret is None:
            return failure("Secret not found", "NotFoundException")
        return ok({k: v for k, v in secret.items() if k != "SecretText"})

    def _get_challenges(self, args):
        secret = self._secret(args)
        if secret is None:
            return failure("Secret not found")
        return ok({
            "Challenges": {
                "DataVaultDefaultProfile": secret.get("DataVaultDefaultProfile", ""),
                "DataVaultRules": secret.get("DataVaultRules"),
            }
        })

    def _update_secret(self, args):
        secret = self._secret(args)
        if secret is None:
            return failure("Secret not found")
        secret.update({k: v for k, v in args.items() if k != "updateChallenges"})
        secret["ParentPath"] = self.folder_path(secret.get("FolderId", ""))
        return ok({})

    def _delete_secret(self, args):
        if self.secrets.pop(args.get("ID"), None) is None:
            return failure("Secret not found")
        return ok(True)

    def _retrieve_secret(self, args):
        secret = self._secret(args)
        if secret is None:
            return failure("Secret not found")
        return ok({"SecretText": secret["SecretText"]})

    def _move_secret(self, args):
        secret = self._secret(args)
        if secret is None:
            return failure("Secret not found")
        secret["FolderId"] = args["targetFolderId"]
        secret["ParentPath"] = self.folder_path(args["targetFolderId"])
        return ok(True)

    def _set_permissions(self, args):
        self.grants[args["ID"]] = args["Grants"]
        return ok()

    def _add_folder(self, args):
        parent_path = self.folder_path(args.get("Parent", ""))
        return ok(self.add_folder(args["Name"], parent_path))

    def _update_members(self, args):
        self.members[args["id"]].extend(args.get("add", []))
        return ok()
