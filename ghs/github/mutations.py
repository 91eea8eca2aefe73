# Issue作成
CREATE_ISSUE = """
mutation CreateIssue($repositoryId: ID!, $title: String!, $body: String) {
  createIssue(input: {
    repositoryId: $repositoryId
    title: $title
    body: $body
  }) {
    issue {
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

# Issueのタイトル・本文更新
UPDATE_ISSUE = """
mutation UpdateIssue($issueId: ID!, $title: String, $body: String) {
  updateIssue(input: {
    id: $issueId
    title: $title
    body: $body
  }) {
    issue {
      id
    }
  }
}
"""

# Issueをクローズ
CLOSE_ISSUE = """
mutation CloseIssue($issueId: ID!) {
  closeIssue(input: {
    issueId: $issueId
  }) {
    issue {
      state
    }
  }
}
"""

# コメント追加
ADD_COMMENT = """
mutation AddComment($subjectId: ID!, $body: String!) {
  addComment(input: {
    subjectId: $subjectId
    body: $body
  }) {
    clientMutationId
  }
}
"""

# Projectに追加
ADD_TO_PROJECT = """
mutation AddToProject($projectId: ID!, $contentId: ID!) {
  addProjectV2ItemById(input: {
    projectId: $projectId
    contentId: $contentId
  }) {
    item {
      id
    }
  }
}
"""

# ProjectにDraft Issueを追加
ADD_DRAFT_ISSUE = """
mutation AddDraftIssue($projectId: ID!, $title: String!, $body: String) {
  addProjectV2DraftIssue(input: {
    projectId: $projectId
    title: $title
    body: $body
  }) {
    projectItem {
      id
    }
  }
}
"""

# Custom fieldを更新（Status等）
UPDATE_PROJECT_FIELD = """
mutation UpdateField($projectId: ID!, $itemId: ID!, $fieldId: ID!, $value: ProjectV2FieldValue!) {
  updateProjectV2ItemFieldValue(input: {
    projectId: $projectId
    itemId: $itemId
    fieldId: $fieldId
    value: $value
  }) {
    projectV2Item {
      id
    }
  }
}
"""

# アイテムのアーカイブ
ARCHIVE_PROJECT_ITEM = """
mutation ArchiveItem($projectId: ID!, $itemId: ID!) {
  archiveProjectV2Item(input: {
    projectId: $projectId
    itemId: $itemId
  }) {
    clientMutationId
  }
}
"""

# アイテムのアーカイブ解除
UNARCHIVE_PROJECT_ITEM = """
mutation UnarchiveItem($projectId: ID!, $itemId: ID!) {
  unarchiveProjectV2Item(input: {
    projectId: $projectId
    itemId: $itemId
  }) {
    clientMutationId
  }
}
"""

# Projectからアイテムを削除
DELETE_PROJECT_ITEM = """
mutation DeleteItem($projectId: ID!, $itemId: ID!) {
  deleteProjectV2Item(input: {
    projectId: $projectId
    itemId: $itemId
  }) {
    deletedItemId
  }
}
"""
