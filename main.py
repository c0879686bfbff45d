#This file is for development purposes only

import logging

from issue_tracker_interface.issue import Comment, Issue, Tag
from youtrack_client_impl import get_client


def main():
    logging.basicConfig(level=logging.INFO)
    client = get_client(interactive=True)
    project = input("Project short name to create a test issue in: ").strip()

    issue = Issue(summary="Smoke test issue", description="Created by main.py")
    issue.set_field("Priority", "Normal")
    issue.comments.append(Comment(text="First comment"))
    issue.tags.append(Tag("smoke"))

    try:
        issue_id = client.create_issue(project, issue)
        print(f"Created {issue_id}")
        print(f"- {client.get_issue(issue_id)}")
        print(f"- links: {client.get_links_for_issue(issue_id)}")
        client.delete_issue(issue_id)
        print(f"Deleted {issue_id}, exists: {client.exists(issue_id)}")
    except Exception as e:
        print(f"Error talking to YouTrack: {e}")
    finally:
        client.close()

if __name__ == "__main__":
    main()
