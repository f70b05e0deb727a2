"""
GraphQL documents for each query shape.

The client posts these verbatim; only the variables change between calls.
"""

from pdq.engine.selector import QueryShape

_USER_FIELDS = """
      id
      name
      title
      email
      enabled
      is_admin
      is_guest
      is_pending
      is_verified
      is_view_only
      join_date
      last_activity
      location
      mobile_phone
      phone
      photo_thumb
      time_zone_identifier
      utc_hours_diff
"""

GET_CURRENT_USER = f"""
  query getCurrentUser {{
    me {{{_USER_FIELDS}
      teams {{
        id
        name
        is_guest
      }}
    }}
  }}
"""

GET_USERS_BY_NAME = """
  query getUsersByName($name: String) {
    users(name: $name) {
      id
      name
      title
    }
  }
"""

LIST_USERS_ONLY = f"""
  query listUsersOnly($userIds: [ID!], $limit: Int) {{
    users(ids: $userIds, limit: $limit) {{{_USER_FIELDS}    }}
  }}
"""

LIST_USERS_WITH_TEAMS = f"""
  query listUsersWithTeams($userIds: [ID!], $limit: Int) {{
    users(ids: $userIds, limit: $limit) {{{_USER_FIELDS}
      teams {{
        id
        name
        is_guest
        picture_url
      }}
    }}
  }}
"""

LIST_USERS_AND_TEAMS = f"""
  query listUsersAndTeams($userIds: [ID!], $teamIds: [ID!], $limit: Int) {{
    users(ids: $userIds, limit: $limit) {{{_USER_FIELDS}
      teams {{
        id
        name
        is_guest
      }}
    }}
    teams(ids: $teamIds) {{
      id
      name
      is_guest
      picture_url
      owners {{
        id
        name
        email
      }}
      users {{
        id
        name
        email
        title
        is_admin
        is_guest
      }}
    }}
  }}
"""

LIST_TEAMS_ONLY = """
  query listTeamsOnly($teamIds: [ID!]) {
    teams(ids: $teamIds) {
      id
      name
      is_guest
      picture_url
      owners {
        id
        name
        email
      }
    }
  }
"""

LIST_TEAMS_WITH_MEMBERS = """
  query listTeamsWithMembers($teamIds: [ID!]) {
    teams(ids: $teamIds) {
      id
      name
      is_guest
      picture_url
      owners {
        id
        name
        email
      }
      users {
        id
        name
        email
        title
        is_admin
        is_guest
      }
    }
  }
"""

LIST_WORKSPACES = """
  query listWorkspaces($limit: Int!, $page: Int!, $membershipKind: WorkspaceMembershipKind!) {
    workspaces(limit: $limit, page: $page, membership_kind: $membershipKind) {
      id
      name
      description
    }
  }
"""

GET_BOARDS = """
  query getBoards($page: Int!, $limit: Int!, $workspace_ids: [ID]) {
    boards(page: $page, limit: $limit, workspace_ids: $workspace_ids) {
      id
      name
      url
    }
  }
"""

GET_DOCS = """
  query getDocs($page: Int!, $limit: Int!, $workspace_ids: [ID]) {
    docs(page: $page, limit: $limit, workspace_ids: $workspace_ids) {
      id
      name
      url
    }
  }
"""

GET_FOLDERS = """
  query getFolders($page: Int!, $limit: Int!, $workspace_ids: [ID]) {
    folders(page: $page, limit: $limit, workspace_ids: $workspace_ids) {
      id
      name
    }
  }
"""

DOCUMENTS: dict[QueryShape, str] = {
    QueryShape.CURRENT_USER: GET_CURRENT_USER,
    QueryShape.USERS_BY_NAME: GET_USERS_BY_NAME,
    QueryShape.USERS_ONLY: LIST_USERS_ONLY,
    QueryShape.USERS_WITH_TEAMS: LIST_USERS_WITH_TEAMS,
    QueryShape.USERS_AND_TEAMS: LIST_USERS_AND_TEAMS,
    QueryShape.TEAMS_ONLY: LIST_TEAMS_ONLY,
    QueryShape.TEAMS_WITH_MEMBERS: LIST_TEAMS_WITH_MEMBERS,
    QueryShape.WORKSPACES: LIST_WORKSPACES,
    QueryShape.BOARDS: GET_BOARDS,
    QueryShape.DOCS: GET_DOCS,
    QueryShape.FOLDERS: GET_FOLDERS,
}


def document_for(shape: QueryShape) -> str:
    """Return the GraphQL document for a query shape."""
    return DOCUMENTS[shape]
