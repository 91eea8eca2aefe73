# Organization配下のProject（番号指定）
GET_ORG_PROJECT = """
query GetOrgProject($owner: String!, $number: Int!) {
  organization(login: $owner) {
    projectV2(number: $number) {
      id
      number
      title
      url
      shortDescription
    }
  }
}
"""

# User配下のProject（番号指定）
GET_USER_PROJECT = """
query GetUserProject($owner: String!, $number: Int!) {
  user(login: $owner) {
    projectV2(number: $number) {
      id
      number
      title
      url
      shortDescription
    }
  }
}
"""

# Organization配下のProject一覧
LIST_ORG_PROJECTS = """
query ListOrgProjects($owner: String!, $after: String) {
  organization(login: $owner) {
    projectsV2(first: 50, after: $after) {
      pageInfo { hasNextPage endCursor }
      nodes {
        id
        number
        title
        url
        shortDescription
      }
    }
  }
}
"""

# User配下のProject一覧
LIST_USER_PROJECTS = """
query ListUserProjects($owner: String!, $after: String) {
  user(login: $owner) {
    projectsV2(first: 50, after: $after) {
      pageInfo { hasNextPage endCursor }
      nodes {
        id
        number
        title
        url
        shortDescription
      }
    }
  }
}
"""

# Organizationのリポジトリ一覧（更新日時の新しい順）
LIST_ORG_REPOSITORIES = """
query ListOrgRepositories($owner: String!, $after: String) {
  organization(login: $owner) {
    repositories(first: 50, after: $after, orderBy: {field: UPDATED_AT, direction: DESC}) {
      pageInfo { hasNextPage endCursor }
      nodes {
        id
        name
        nameWithOwner
      }
    }
  }
}
"""

# Userのリポジトリ一覧（更新日時の新しい順）
LIST_USER_REPOSITORIES = """
query ListUserRepositories($owner: String!, $after: String) {
  user(login: $owner) {
    repositories(first: 50, after: $after, orderBy: {field: UPDATED_AT, direction: DESC}) {
      pageInfo { hasNextPage endCursor }
      nodes {
        id
        name
        nameWithOwner
      }
    }
  }
}
"""

# Projectのフィールド情報取得
GET_PROJECT_FIELDS = """
query GetProjectFields($projectId: ID!, $after: String) {
  node(id: $projectId) {
    ... on ProjectV2 {
      fields(first: 50, after: $after) {
        pageInfo { hasNextPage endCursor }
        nodes {
          ... on ProjectV2SingleSelectField {
            id
            name
            options {
              id
              name
            }
          }
        }
      }
    }
  }
}
"""

# Project v2のアイテム取得
GET_PROJECT_ITEMS = """
query GetProjectItems($projectId: ID!, $after: String) {
  node(id: $projectId) {
    ... on ProjectV2 {
      items(first: 100, after: $after) {
        pageInfo { hasNextPage endCursor }
        nodes {
          id
          content {
            __typename
            ... on Issue {
              id
              number
              title
              url
              repository { nameWithOwner }
            }
            ... on PullRequest {
              id
              number
              title
              url
              repository { nameWithOwner }
            }
            ... on DraftIssue {
              id
              title
            }
          }
          fieldValues(first: 50) {
            nodes {
              ... on ProjectV2ItemFieldSingleSelectValue {
                name
                field { ... on ProjectV2FieldCommon { name } }
              }
            }
          }
        }
      }
    }
  }
}
"""

# Projectアイテム単体（PVTI_*）
GET_PROJECT_ITEM = """
query GetProjectItem($id: ID!) {
  node(id: $id) {
    __typename
    ... on ProjectV2Item {
      id
      isArchived
      project { id title number }
      content {
        __typename
        ... on Issue {
          id
          number
          title
          url
          repository { nameWithOwner }
        }
        ... on PullRequest {
          id
          number
          title
          url
          repository { nameWithOwner }
        }
        ... on DraftIssue {
          id
          title
        }
      }
      fieldValues(first: 50) {
        nodes {
          ... on ProjectV2ItemFieldSingleSelectValue {
            name
            field { ... on ProjectV2FieldCommon { name } }
          }
        }
      }
    }
  }
}
"""

# リポジトリID取得
GET_REPOSITORY_ID = """
query GetRepositoryId($owner: String!, $name: String!) {
  repository(owner: $owner, name: $name) {
    id
  }
}
"""

# Issue取得（リポジトリ + 番号）
GET_ISSUE = """
query GetIssue($owner: String!, $repo: String!, $number: Int!) {
  repository(owner: $owner, name: $repo) {
    issue(number: $number) {
      id
      number
      title
      body
      state
      url
      repository {
        owner { login }
        name
      }
    }
  }
}
"""

# Issue取得（ノードID）
GET_ISSUE_BY_ID = """
query GetIssueById($id: ID!) {
  node(id: $id) {
    __typename
    ... on Issue {
      id
      number
      title
      body
      state
      url
      createdAt
      updatedAt
      author { login }
      repository {
        owner { login }
        name
      }
    }
  }
}
"""

# リポジトリのIssue一覧（作成日時の新しい順）
LIST_ISSUES = """
query ListIssues($owner: String!, $repo: String!, $after: String, $states: [IssueState!]) {
  repository(owner: $owner, name: $repo) {
    issues(first: 100, after: $after, states: $states, orderBy: {field: CREATED_AT, direction: DESC}) {
      pageInfo { hasNextPage endCursor }
      nodes {
        id
        number
        title
        state
        url
        createdAt
        updatedAt
        author { login }
      }
    }
  }
}
"""

# Issueのコメント一覧
LIST_ISSUE_COMMENTS = """
query ListIssueComments($id: ID!, $after: String) {
  node(id: $id) {
    __typename
    ... on Issue {
      comments(first: 100, after: $after) {
        pageInfo { hasNextPage endCursor }
        nodes {
          id
          url
          body
          createdAt
          updatedAt
          author { login }
        }
      }
    }
  }
}
"""

# Issue検索 + 紐付くProjectアイテム（Project側から辿れないIssueの補完用）
SEARCH_PROJECT_ISSUES = """
query SearchProjectIssues($q: String!, $after: String) {
  search(type: ISSUE, query: $q, first: 50, after: $after) {
    pageInfo { hasNextPage endCursor }
    nodes {
      __typename
      ... on Issue {
        id
        number
        title
        state
        url
        createdAt
        updatedAt
        author { login }
        repository { nameWithOwner }
        projectItems(first: 50) {
          nodes {
            id
            project { id }
            fieldValues(first: 50) {
              nodes {
                ... on ProjectV2ItemFieldSingleSelectValue {
                  name
                  field { ... on ProjectV2FieldCommon { name } }
                }
              }
            }
          }
        }
      }
    }
  }
}
"""
