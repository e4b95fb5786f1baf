"""GraphQL query and mutation constants for the Linear API."""

GET_PROJECTS = """
query Projects {
  teams {
    nodes {
      projects {
        nodes { id name description startDate targetDate state }
      }
    }
  }
}
"""

GET_PROJECT_ISSUES = """
query GetProjectIssues($projectId: String!) {
  project(id: $projectId) {
    id
    name
    description
    startDate
    targetDate
    state
    issues {
      nodes {
        id
        title
        description
        priority
        state { name type color }
        labels { nodes { name color } }
        projectMilestone { id name description targetDate }
        createdAt
        updatedAt
      }
    }
    projectMilestones {
      nodes { id name description targetDate }
    }
  }
}
"""

GET_PROJECT_ISSUE_COUNT = """
query ProjectIssueCount($projectId: String!) {
  project(id: $projectId) {
    id
    issues { nodes { id } }
  }
}
"""

GET_PROJECT_EXISTS = """
query CheckProject($projectId: String!) {
  project(id: $projectId) { id }
}
"""

GET_PROJECT_TEAMS = """
query GetProjectTeam($projectId: String!) {
  project(id: $projectId) {
    teams {
      nodes {
        id
        labels { nodes { id name } }
      }
    }
  }
}
"""

CREATE_LABEL = """
mutation CreateLabel($input: LabelCreateInput!) {
  labelCreate(input: $input) {
    success
    label { id }
  }
}
"""

CREATE_ISSUE = """
mutation CreateIssue($input: IssueCreateInput!) {
  issueCreate(input: $input) {
    success
    issue { id title }
  }
}
"""
