"""
GraphQL operation documents used by the client.

Each operation is declared once, with its variables and the response
selection the client relies on. ``__typename`` is selected on every object
so responses can be normalized into the client cache.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Operation:
    name: str
    document: str

    @property
    def result_key(self) -> str:
        """Top-level field the operation returns under ``data``."""
        return self.name


# ── Queries ────────────────────────────────────────────────────────────

QUERY_THOUGHTS = Operation("thoughts", """
query thoughts($username: String) {
  thoughts(username: $username) {
    __typename
    _id
    username
    thoughtText
    createdAt
    reactionCount
    reactions {
      __typename
      _id
      createdAt
      username
      reactionBody
    }
  }
}
""")

QUERY_THOUGHT = Operation("thought", """
query thought($id: ID!) {
  thought(_id: $id) {
    __typename
    _id
    username
    thoughtText
    createdAt
    reactionCount
    reactions {
      __typename
      _id
      createdAt
      username
      reactionBody
    }
  }
}
""")

QUERY_USER = Operation("user", """
query user($username: String!) {
  user(username: $username) {
    __typename
    _id
    username
    email
    friendCount
    friends {
      __typename
      _id
      username
    }
    thoughts {
      __typename
      _id
      thoughtText
      createdAt
      reactionCount
    }
  }
}
""")

QUERY_USERS = Operation("users", """
query users {
  users {
    __typename
    _id
    username
    email
    friendCount
  }
}
""")

QUERY_ME = Operation("me", """
query me {
  me {
    __typename
    _id
    username
    email
    friendCount
    thoughts {
      __typename
      _id
      thoughtText
      createdAt
      reactionCount
      reactions {
        __typename
        _id
        createdAt
        reactionBody
        username
      }
    }
    friends {
      __typename
      _id
      username
    }
  }
}
""")

QUERY_IS_FRIEND = Operation("isFriend", """
query isFriend($username: String!) {
  isFriend(username: $username)
}
""")

# ── Mutations ──────────────────────────────────────────────────────────

LOGIN_USER = Operation("login", """
mutation login($email: String!, $password: String!) {
  login(email: $email, password: $password) {
    token
    user {
      __typename
      _id
      username
    }
  }
}
""")

ADD_USER = Operation("addUser", """
mutation addUser($username: String!, $email: String!, $password: String!) {
  addUser(username: $username, email: $email, password: $password) {
    token
    user {
      __typename
      _id
      username
    }
  }
}
""")

ADD_THOUGHT = Operation("addThought", """
mutation addThought($thoughtText: String!) {
  addThought(thoughtText: $thoughtText) {
    __typename
    _id
    thoughtText
    createdAt
    username
    reactionCount
    reactions {
      __typename
      _id
    }
  }
}
""")

ADD_REACTION = Operation("addReaction", """
mutation addReaction($thoughtId: ID!, $reactionBody: String!) {
  addReaction(thoughtId: $thoughtId, reactionBody: $reactionBody) {
    __typename
    _id
    reactionCount
    reactions {
      __typename
      _id
      reactionBody
      createdAt
      username
    }
  }
}
""")

ADD_FRIEND = Operation("addFriend", """
mutation addFriend($id: ID!) {
  addFriend(friendId: $id) {
    __typename
    _id
    username
    friendCount
    friends {
      __typename
      _id
      username
    }
  }
}
""")

REMOVE_FRIEND = Operation("removeFriend", """
mutation removeFriend($id: ID!) {
  removeFriend(friendId: $id) {
    __typename
    _id
    username
    friendCount
    friends {
      __typename
      _id
      username
    }
  }
}
""")

REMOVE_THOUGHT = Operation("removeThought", """
mutation removeThought($id: ID!) {
  removeThought(thoughtId: $id) {
    __typename
    _id
    username
    thoughtText
    createdAt
    reactionCount
  }
}
""")

REMOVE_REACTION = Operation("removeReaction", """
mutation removeReaction($thoughtId: ID!, $reactionId: ID!) {
  removeReaction(thoughtId: $thoughtId, reactionId: $reactionId) {
    __typename
    _id
    reactionCount
    reactions {
      __typename
      _id
      reactionBody
      createdAt
      username
    }
  }
}
""")
