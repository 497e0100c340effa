"""Data validation functions."""

import duckdb


def validate_session(conn: duckdb.DuckDBPyConnection, session: int) -> dict:
    """Validate data integrity for a session."""
    issues = []
    stats = {}

    ballot_check = conn.execute(
        """
        SELECT
            COUNT(*) as total,
            SUM(CASE WHEN votes_for + votes_against + votes_abstain = 0 THEN 1 ELSE 0 END) as empty
        FROM ballot WHERE session = ?
        """,
        [session],
    ).fetchone()
    stats["ballots"] = ballot_check[0] or 0
    empty_ballots = ballot_check[1] or 0
    if stats["ballots"] == 0:
        issues.append("No ballots found")
    if empty_ballots > 0:
        issues.append(f"{empty_ballots} ballots have zero votes in summary")

    missing = conn.execute(
        """
        SELECT COUNT(*) FROM ballot b
        WHERE b.session = ?
          AND NOT EXISTS (SELECT 1 FROM vote v WHERE v.ballot_id = b.id)
        """,
        [session],
    ).fetchone()[0]
    stats["ballots_missing_votes"] = missing
    if missing > 0:
        issues.append(f"{missing} ballots have no individual votes loaded")

    stats["votes"] = conn.execute(
        """
        SELECT COUNT(*) FROM vote
        JOIN ballot b ON vote.ballot_id = b.id
        WHERE b.session = ?
        """,
        [session],
    ).fetchone()[0]

    orphans = conn.execute(
        """
        SELECT COUNT(*) FROM vote v
        LEFT JOIN person p ON p.id = v.person_id
        WHERE p.id IS NULL
        """
    ).fetchone()[0]
    stats["orphan_votes"] = orphans
    if orphans > 0:
        issues.append(f"{orphans} votes reference unknown persons")

    if stats["ballots"]:
        stats["coverage_pct"] = round((stats["ballots"] - missing) / stats["ballots"] * 100, 1)
    else:
        stats["coverage_pct"] = 0

    return {
        "session": session,
        "valid": len(issues) == 0,
        "stats": stats,
        "issues": issues,
    }
