# inheritx

A small Flask HTTP backend, backed by SQLite, that stores and serves:

- notifications
- user activities, with pagination
- claims, with a `pending` / `approved` / `rejected` status
- KYC (know-your-customer) records and their verification status
- withdrawal history, where a withdrawal is only recorded for a user whose KYC
  record is `verified`

## Installation

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Running the server

```
inheritx
```

Options:

- `--database PATH`: SQLite database file (default `inheritx_db.sqlite3`)
- `--host HOST`: address to listen on (default `127.0.0.1`)
- `--port PORT`: port to listen on (default `8080`)

On start-up the command creates the tables for notifications, user
activities, claims and KYC records if they are missing
(`inheritx.db.run_migrations`, safe to run again), prints the address and
serves with Flask's built-in server. The `withdrawal_history` table is created
on first use by the withdrawal repository.

## Endpoints

Request and response bodies are JSON. Dates in activity, KYC and paginated
withdrawal responses are written as `dd-mm-yyyy`. Other records give their
timestamps in ISO 8601 UTC form. Failures come back as `{"error": "..."}`. A
malformed body or query parameter gives 400.

### Notifications

| Method | Path                        | Purpose                                    |
|--------|-----------------------------|--------------------------------------------|
| GET    | `/notifications`            | list all notifications                     |
| POST   | `/notifications`            | create (`title`, `body`); 201, unread      |
| GET    | `/notifications/{id}`       | fetch one; 404 if missing                  |
| PUT    | `/notifications/{id}`       | update any of `title`, `body`, `is_read`   |
| DELETE | `/notifications/{id}`       | delete; 204, also when it did not exist    |
| POST   | `/notifications/{id}/read`  | mark as read                               |

### User activities

| Method | Path                    | Purpose                                             |
|--------|-------------------------|-----------------------------------------------------|
| POST   | `/activities`           | record an activity (`user_id`, `activity_type`, `details`, `action_type`, optional `action_link`); 201 |
| GET    | `/activities/{user_id}` | a user's activities, newest first, as `{activities, total, page, page_size}`; `page` and `page_size` default to 1 and 10 and must be positive |

### Claims

| Method | Path                                     | Purpose                                 |
|--------|------------------------------------------|-----------------------------------------|
| GET    | `/claims`                                | list all claims                         |
| POST   | `/claims`                                | create (`user_id`, `amount`, `description`); starts as `pending`; 201 |
| GET    | `/claims/user/{user_id}`                 | claims of one user                      |
| GET    | `/claims/status/{status}`                | claims with a status (case-insensitive) |
| GET    | `/claims/user/{user_id}/status/{status}` | both filters                            |
| PUT    | `/claims/{id}`                           | update `status` and/or `description`    |

An unknown status gives 400 `{"error": "Invalid status"}`.

### KYC

| Method | Path                       | Purpose                                         |
|--------|----------------------------|-------------------------------------------------|
| POST   | `/api/kyc/create`          | submit a record (`user_id`, `full_name`, `date_of_birth`, `id_type`, `id_number`, `address`); starts as `pending`; 201 |
| POST   | `/api/kyc/verify`          | set `verification_status` for a record `id`     |
| GET    | `/api/kyc/status?id=N`     | fetch a record by id; 404 if missing            |
| GET    | `/api/kyc/user?user_id=N`  | fetch a user's record; 404 if missing           |

### Withdrawals

| Method | Path                              | Purpose                                     |
|--------|-----------------------------------|---------------------------------------------|
| POST   | `/api/withdrawals/record`         | record a withdrawal; 403 unless the user's KYC is `verified` |
| GET    | `/api/withdrawals/history`        | paginated history as `{records, total, page, page_size}` |
| POST   | `/api/withdrawals/delete`         | delete by `id`                              |
| GET    | `/api/withdrawals/single?id=N`    | fetch one record                            |
| POST   | `/api/withdrawals/update`         | replace `plan_id`, `wallet_id`, `amount`, `payer_name` of record `id` |
| GET    | `/api/withdrawals/user?id=N`      | records of one user                         |

The body of `/api/withdrawals/record` has the fields `user_id`,
`activity_type`, `details`, `action_type` and optional `action_link`. The
user id is read as an integer (0 when it is not one) to check KYC. The stored
record takes `plan_id` from `user_id`, `wallet_id` from `activity_type`,
`amount` from `details`, which must be an integer, and `payer_name` from
`action_type`.

## Using it from Python

`inheritx.app.create_app(pool)` builds the Flask application from an
`inheritx.db.Pool`. Each request borrows a connection with `Pool.get()`, a
context manager. A pool over `":memory:"` shares one connection, which suits
tests:

```python
from inheritx.app import create_app
from inheritx.db import Pool, run_migrations

pool = Pool(":memory:")
with pool.get() as conn:
    run_migrations(conn)
client = create_app(pool).test_client()
print(client.get("/notifications").get_json())
```

The repository modules in `inheritx.repositories` (`activity`, `claims`,
`kyc`, `notifications`, `withdrawals`) also work on their own, with a
connection from `inheritx.db.connect`. They take and return the dataclasses in
`inheritx.models`, and raise `inheritx.db.NotFoundError` when a record does
not exist. `inheritx.models.to_json` and `from_json` convert those
dataclasses to and from JSON values.

An in-memory activity log is available as
`inheritx.web.activity_log_controller.ActivityLogStore`. Its `/activity-log`
routes come from `create_blueprint(store)`. The application built by
`create_app` does not mount them.

## What it does not do

There is no authentication or authorisation on any route. The `inheritx`
command runs Flask's built-in development server. To serve in production,
hand the application from `create_app` to a WSGI server of your choice.